# tests/api/test_runner.py
import io
import json
from pathlib import Path

import pytest

from api.runner import RunnerOptions, TestRunner, run_tests
from application.exceptions import NoFlowsFoundError
from infrastructure.config.settings import Settings
from tests.mock_http_client import MockHttpClient, RecordingLogger, json_response

CONTEXT = """# Todo API

## Base URLs
- api: http://api.test
"""

SMOKE_FLOW = """
name: Smoke
tags: [smoke]
steps:
  - name: health
    request:
      url: /health
    assertions:
      - path: status
        operator: equals
        value: 200
"""

BROKEN_FLOW = """
name: Broken
tags: [regression]
steps:
  - name: todos
    request:
      url: "{api}/todos"
    assertions:
      - path: items
        operator: exists
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "context.md").write_text(CONTEXT, encoding="utf-8")
    flows = tmp_path / "flows"
    flows.mkdir()
    (flows / "a_smoke.yaml").write_text(SMOKE_FLOW, encoding="utf-8")
    (flows / "b_broken.yml").write_text(BROKEN_FLOW, encoding="utf-8")
    (flows / "c_invalid.yaml").write_text("steps: []\n", encoding="utf-8")
    return tmp_path


def _http_client() -> MockHttpClient:
    return (
        MockHttpClient()
        .add("GET", "http://api.test/health", json_response(200, {"ok": True}))
        .add("GET", "http://api.test/todos", json_response(200, {}))
    )


def _run(options: RunnerOptions, logger=None):
    out = io.StringIO()
    report = TestRunner(
        options,
        logger=logger or RecordingLogger(),
        http_client=_http_client(),
        settings=Settings(),
        out=out,
    ).run()
    return report, out.getvalue()


def test_runs_directory_and_skips_invalid_files(workspace: Path):
    logger = RecordingLogger()
    report, output = _run(
        RunnerOptions(context_file=workspace / "context.md", test_dir=workspace / "flows"),
        logger=logger,
    )

    assert report.total_flows == 2
    assert report.passed_flows == 1
    assert report.failed_flows == 1
    assert "runner.load_failed" in logger.names()
    assert "TESTFLOW RESULTS" in output


def test_tag_filter(workspace: Path):
    report, _ = _run(
        RunnerOptions(context_file=workspace / "context.md", test_dir=workspace / "flows", tags=["smoke"])
    )
    assert [f.flow.name for f in report.flows] == ["Smoke"]


def test_tag_filter_with_no_match(workspace: Path):
    with pytest.raises(NoFlowsFoundError):
        _run(RunnerOptions(test_dir=workspace / "flows", tags=["nothing"]))


def test_explicit_files_and_json_format(workspace: Path):
    report, output = _run(
        RunnerOptions(
            context_file=workspace / "context.md",
            test_files=[workspace / "flows" / "a_smoke.yaml"],
            format="json",
        )
    )
    data = json.loads(output)
    assert data["totalFlows"] == 1
    assert data["flows"][0]["flow"]["name"] == "Smoke"


def test_markdown_format(workspace: Path):
    _, output = _run(
        RunnerOptions(context_file=workspace / "context.md", test_dir=workspace / "flows", format="markdown")
    )
    assert output.startswith("# Test Report")
    assert "### Broken" in output


def test_no_files(tmp_path: Path):
    with pytest.raises(NoFlowsFoundError, match="No test files found"):
        _run(RunnerOptions(test_dir=tmp_path / "empty"))


def test_unknown_format():
    with pytest.raises(ValueError):
        TestRunner(RunnerOptions(format="html"), logger=RecordingLogger(), settings=Settings())


def test_run_tests_helper(workspace: Path):
    report = run_tests(
        RunnerOptions(context_file=workspace / "context.md", test_files=[workspace / "flows" / "a_smoke.yaml"]),
        logger=RecordingLogger(),
        http_client=_http_client(),
        settings=Settings(),
        out=io.StringIO(),
    )
    assert report.passed_flows == 1


class ClosingHttpClient(MockHttpClient):
    instances = []

    def __init__(self, timeout_sec=30):
        super().__init__()
        self.add("GET", "http://api.test/health", json_response(200, {"ok": True}))
        self.closed = False
        ClosingHttpClient.instances.append(self)

    def close(self) -> None:
        self.closed = True


def test_owned_http_client_is_closed(workspace: Path, monkeypatch):
    ClosingHttpClient.instances = []
    monkeypatch.setattr("api.runner.RequestsSessionHttpClient", ClosingHttpClient)

    report = TestRunner(
        RunnerOptions(context_file=workspace / "context.md", test_files=[workspace / "flows" / "a_smoke.yaml"]),
        logger=RecordingLogger(),
        settings=Settings(),
        out=io.StringIO(),
    ).run()

    assert report.passed_flows == 1
    assert [c.closed for c in ClosingHttpClient.instances] == [True]


def test_injected_http_client_is_left_open(workspace: Path):
    client = ClosingHttpClient()
    TestRunner(
        RunnerOptions(context_file=workspace / "context.md", test_files=[workspace / "flows" / "a_smoke.yaml"]),
        logger=RecordingLogger(),
        http_client=client,
        settings=Settings(),
        out=io.StringIO(),
    ).run()
    assert client.closed is False
