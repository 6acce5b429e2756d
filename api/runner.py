# api/runner.py
"""
Composition root for running flows: wiring of executors and adapters,
file discovery, tag filtering, execution and report rendering.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO

from application.exceptions import NoFlowsFoundError
from application.executor.flow_executor import FlowExecutor
from application.executor.handler_registry import HandlerRegistry
from application.executor.step_executor import StepExecutor
from application.handlers.assert_handler import AssertStepHandler
from application.handlers.capture_handler import CaptureStepHandler
from application.handlers.http_handler import HttpStepHandler
from application.handlers.poll_handler import PollStepHandler
from application.ports.ai_evaluator import AiEvaluatorPort
from application.ports.clock import ClockPort
from application.ports.http_client import HttpClientPort
from application.ports.logger import LoggerPort
from application.services.assertion_evaluator import AssertionEvaluator
from application.services.execution_deps import ExecutionDeps
from application.services.poller import Poller
from application.services.reporter import format_console, generate_report, to_json, to_markdown
from application.services.request_preparer import RequestPreparer
from application.services.template_renderer import TemplateRenderer
from domain.context import AiConfig, ProjectContext
from domain.flow import Flow
from domain.results import FlowResult, TestReport
from infrastructure.ai.factory import build_ai_evaluator
from infrastructure.clock.system_clock import SystemClock
from infrastructure.config.settings import Settings, resolve_ai_config
from infrastructure.context.markdown_loader import MarkdownContextLoader
from infrastructure.flow.base_loader import FlowLoadError
from infrastructure.flow.file_finder import FlowFileFinder
from infrastructure.flow.loader_registry import FlowLoaderRegistry
from infrastructure.http.requests_client import RequestsSessionHttpClient
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.url.base_url_resolver import BaseUrlResolver

FORMATS = ("console", "json", "markdown")


def build_flow_executor(
    http_client: HttpClientPort,
    logger: LoggerPort,
    context: Optional[ProjectContext] = None,
    ai_evaluator: Optional[AiEvaluatorPort] = None,
    clock: Optional[ClockPort] = None,
) -> FlowExecutor:
    renderer = TemplateRenderer()
    handlers = [
        HttpStepHandler(RequestPreparer(renderer)),
        PollStepHandler(Poller()),
        CaptureStepHandler(),
        AssertStepHandler(AssertionEvaluator()),
    ]
    deps = ExecutionDeps(
        http_client=http_client,
        url_resolver=BaseUrlResolver(dict(context.base_urls) if context else {}),
        logger=logger,
        clock=clock or SystemClock(),
        ai_evaluator=ai_evaluator,
    )
    return FlowExecutor(StepExecutor(HandlerRegistry(handlers)), deps)


@dataclass
class RunnerOptions:
    context_file: Optional[Path] = None
    test_dir: Optional[Path] = None
    test_files: List[Path] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    format: str = "console"
    verbose: bool = False
    ai: Optional[AiConfig] = None


class TestRunner:
    __test__ = False  # not a pytest test class

    def __init__(
        self,
        options: RunnerOptions,
        logger: Optional[LoggerPort] = None,
        http_client: Optional[HttpClientPort] = None,
        settings: Optional[Settings] = None,
        out: Optional[TextIO] = None,
    ):
        if options.format not in FORMATS:
            raise ValueError(f"Unknown format: {options.format} (expected one of {', '.join(FORMATS)})")
        self._opts = options
        self._settings = settings or Settings.load()
        self._logger = logger or ConsoleLogger(level="debug" if options.verbose else "warning")
        self._http_client = http_client
        self._out = out

    def run(self) -> TestReport:
        context = self._load_context()
        flows = self._load_flows(self._collect_files())

        ai_config = resolve_ai_config(self._opts.ai, context.ai if context else None, self._settings.ai_config())
        owned_client = None
        http_client = self._http_client
        if http_client is None:
            owned_client = RequestsSessionHttpClient(timeout_sec=self._settings.http_timeout_sec)
            http_client = owned_client

        executor = build_flow_executor(
            http_client=http_client,
            logger=self._logger,
            context=context,
            ai_evaluator=build_ai_evaluator(ai_config),
        )

        results: List[FlowResult] = []
        try:
            for flow in flows:
                result = executor.execute_flow(flow)
                results.append(result)
                self._logger.info("runner.flow_done", flow=flow.name, ok=result.success, elapsed_ms=result.duration_ms)
        finally:
            if owned_client is not None:
                owned_client.close()

        report = generate_report(results)
        self._render(report)
        return report

    def _load_context(self) -> Optional[ProjectContext]:
        if not self._opts.context_file:
            return None
        context = MarkdownContextLoader().load_from_file(self._opts.context_file)
        self._logger.info("runner.context", name=context.name, base_urls=list(context.base_urls))
        return context

    def _collect_files(self) -> List[Path]:
        files = [Path(p) for p in self._opts.test_files]
        if self._opts.test_dir:
            files.extend(FlowFileFinder(Path(self._opts.test_dir)).discover())
        if not files:
            raise NoFlowsFoundError("No test files found")
        self._logger.info("runner.files", count=len(files))
        return files

    def _load_flows(self, files: List[Path]) -> List[Flow]:
        registry = FlowLoaderRegistry()
        wanted = set(self._opts.tags)
        flows: List[Flow] = []

        for path in files:
            try:
                flow = registry.get_loader(path).load_from_file(path)
            except FlowLoadError as e:
                self._logger.error("runner.load_failed", file=str(path), error=str(e))
                continue
            if wanted and not (wanted & flow.tags):
                self._logger.debug("runner.skipped_by_tags", flow=flow.name)
                continue
            flows.append(flow)

        if not flows:
            raise NoFlowsFoundError("No valid test flows found (check tags filter)")
        return flows

    def _render(self, report: TestReport) -> None:
        out = self._out or sys.stdout
        if self._opts.format == "json":
            out.write(to_json(report) + "\n")
        elif self._opts.format == "markdown":
            out.write(to_markdown(report) + "\n")
        else:
            out.write(format_console(report) + "\n")


def run_tests(options: RunnerOptions, **kwargs) -> TestReport:
    return TestRunner(options, **kwargs).run()
