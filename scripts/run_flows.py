#!/usr/bin/env python3
"""
Run YAML test flows from the command line

Usage:
  python scripts/run_flows.py --dir ./flows --context ./context.md
  python scripts/run_flows.py flow1.yaml flow2.yaml -v
  python scripts/run_flows.py --dir ./flows --tags smoke --format json
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.runner import FORMATS, RunnerOptions, run_tests
from domain.context import AiConfig, AiProvider
from infrastructure.config.settings import Settings
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testflow",
        description="Declarative API testing powered by YAML flows",
    )
    parser.add_argument("files", nargs="*", type=Path, help="YAML test files to run")
    parser.add_argument("-c", "--context", type=Path, help="Path to context markdown file")
    parser.add_argument("-d", "--dir", type=Path, help="Directory containing YAML test files")
    parser.add_argument("-t", "--tags", help="Comma-separated tags to filter")
    parser.add_argument("-f", "--format", choices=FORMATS, default="console", help="Output format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--ai-provider", choices=[p.value for p in AiProvider], help="AI provider (default: ollama)")
    parser.add_argument("--ai-url", help="AI API URL (for Ollama, default: http://localhost:11434)")
    parser.add_argument("--ai-model", help="AI model name (varies by provider)")
    parser.add_argument("--ai-key", help="API key (required for OpenAI/Anthropic)")
    return parser


def options_from_args(args: argparse.Namespace) -> RunnerOptions:
    ai = None
    if args.ai_provider or args.ai_url or args.ai_model or args.ai_key:
        ai = AiConfig(
            provider=AiProvider(args.ai_provider or AiProvider.OLLAMA.value),
            url=args.ai_url or "",
            model=args.ai_model or "",
            api_key=args.ai_key,
        )

    return RunnerOptions(
        context_file=args.context,
        test_dir=args.dir,
        test_files=list(args.files),
        tags=[t.strip() for t in args.tags.split(",") if t.strip()] if args.tags else [],
        format=args.format,
        verbose=args.verbose,
        ai=ai,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    setup_console_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        report = run_tests(options_from_args(args), logger=LoguruLogger(), settings=settings)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    return 1 if report.failed_flows > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
