# tests/application/executor/test_step_executor.py
from application.executor.handler_registry import HandlerRegistry
from application.executor.step_executor import StepExecutor
from application.handlers.assert_handler import AssertStepHandler
from application.handlers.base import StepHandler
from application.handlers.capture_handler import CaptureStepHandler
from application.handlers.http_handler import HttpStepHandler
from application.handlers.poll_handler import PollStepHandler
from application.services.assertion_evaluator import AssertionEvaluator
from application.services.poller import Poller
from application.services.request_preparer import RequestPreparer
from application.services.template_renderer import TemplateRenderer
from domain.run import FlowContext
from domain.steps.assertion import AssertionOperator, AssertionSpec
from domain.steps.base import Step
from domain.steps.capture import CaptureSpec
from domain.steps.http import GraphQLRequestSpec, HttpMethod, HttpRequestSpec
from tests.mock_http_client import (
    FakeClock,
    MockHttpClient,
    RecordingLogger,
    connection_refused,
    json_response,
    make_deps,
)

BASE = {"api": "http://api.test"}


def _executor(extra=None):
    handlers = [
        HttpStepHandler(RequestPreparer(TemplateRenderer())),
        PollStepHandler(Poller()),
        CaptureStepHandler(),
        AssertStepHandler(AssertionEvaluator()),
    ]
    return StepExecutor(HandlerRegistry(handlers + list(extra or [])))


def test_successful_step():
    clock = FakeClock()
    client = MockHttpClient(clock, latency_ms=7).add("GET", "http://api.test/x", json_response(200, {"id": 5}))
    step = Step(
        name="get",
        request=HttpRequestSpec(method=HttpMethod.GET, url="/x"),
        capture=[CaptureSpec("id", "id")],
        assertions=[AssertionSpec(path="status", operator=AssertionOperator.EQUALS, value=200)],
    )
    ctx = FlowContext()

    result = _executor().execute(step, ctx, make_deps(http_client=client, clock=clock, base_urls=BASE))

    assert result.success is True
    assert result.error is None
    assert result.duration_ms == 7
    assert result.request.url == "http://api.test/x"
    assert result.response.status == 200
    assert result.captures == {"id": 5}
    assert ctx.vars == {"id": 5}


def test_step_without_assertions_succeeds_even_on_500():
    client = MockHttpClient().add("GET", "http://api.test/x", json_response(500, {}))
    step = Step(name="s", request=HttpRequestSpec(method=HttpMethod.GET, url="/x"))
    result = _executor().execute(step, FlowContext(), make_deps(http_client=client, base_urls=BASE))
    assert result.success is True


def test_failed_assertion_fails_step():
    client = MockHttpClient().add("GET", "http://api.test/x", json_response(500, {}))
    step = Step(
        name="s",
        request=HttpRequestSpec(method=HttpMethod.GET, url="/x"),
        assertions=[AssertionSpec(path="status", operator=AssertionOperator.EQUALS, value=404)],
    )
    result = _executor().execute(step, FlowContext(), make_deps(http_client=client, base_urls=BASE))
    assert result.success is False
    assert result.error is None
    assert "404" in result.assertions[0].message and "500" in result.assertions[0].message


def test_transport_error_becomes_step_error():
    url = "http://api.test/x"
    client = MockHttpClient().add("GET", url, connection_refused(url))
    logger = RecordingLogger()
    step = Step(
        name="s",
        request=HttpRequestSpec(method=HttpMethod.GET, url="/x"),
        assertions=[AssertionSpec(path="status", operator=AssertionOperator.EQUALS, value=200)],
    )

    result = _executor().execute(step, FlowContext(), make_deps(http_client=client, logger=logger, base_urls=BASE))

    assert result.success is False
    assert "Connection refused" in result.error
    assert result.assertions == []
    assert result.response is None
    assert result.request.url == url
    assert "step.failed" in logger.names()


class ExplodingHandler(StepHandler):
    def supports(self, step) -> bool:
        return True

    def handle(self, step, state, ctx, deps):
        raise ValueError()


def test_partial_results_kept_when_a_later_phase_raises():
    client = MockHttpClient().add("GET", "http://api.test/x", json_response(200, {"id": 1}))
    step = Step(
        name="s",
        request=HttpRequestSpec(method=HttpMethod.GET, url="/x"),
        capture=[CaptureSpec("id", "id")],
    )
    result = _executor([ExplodingHandler()]).execute(step, FlowContext(), make_deps(http_client=client, base_urls=BASE))

    assert result.success is False
    assert result.error == "ValueError"
    assert result.captures == {"id": 1}
    assert result.response.status == 200


def test_step_logs_are_bound_to_step_name():
    logger = RecordingLogger()
    client = MockHttpClient().add("GET", "http://api.test/x", json_response(200, {}))
    step = Step(name="named", request=HttpRequestSpec(method=HttpMethod.GET, url="/x"))
    _executor().execute(step, FlowContext(), make_deps(http_client=client, logger=logger, base_urls=BASE))
    assert all(fields.get("step") == "named" for _, _, fields in logger.events)


def test_graphql_errors_flag_does_not_abort_assertions():
    client = MockHttpClient().add(
        "POST", "http://api.test/graphql", json_response(200, {"errors": True, "data": {"ok": 1}})
    )
    step = Step(
        name="gql",
        request=HttpRequestSpec(method=HttpMethod.POST, url="/graphql", graphql=GraphQLRequestSpec(query="{ ok }")),
        assertions=[AssertionSpec(path="data.ok", operator=AssertionOperator.EQUALS, value=1)],
    )

    result = _executor().execute(step, FlowContext(), make_deps(http_client=client, base_urls=BASE))

    assert result.error is None
    assert result.success is True
    assert len(result.assertions) == 1
