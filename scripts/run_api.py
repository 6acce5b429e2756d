#!/usr/bin/env python3
"""
Start the flow runner HTTP API (POST /flows/run)

Usage:
  python scripts/run_api.py --port 8080 --reload
"""
import argparse
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from infrastructure.config.settings import Settings
from infrastructure.logging.log_setup import setup_console_logging


def main() -> None:
    parser = argparse.ArgumentParser(prog="testflow-api", description="Serve the flow runner API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = parser.parse_args()

    settings = Settings.load()
    setup_console_logging(settings.log_level)
    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
