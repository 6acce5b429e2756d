# application/services/poller.py
from __future__ import annotations

from typing import Any

from application.outcome import PollOutcome
from application.ports.http_client import HttpResponse
from application.services.execution_deps import ExecutionDeps
from application.services.path_resolver import extract_value
from application.services.request_preparer import PreparedHttpRequest
from domain.steps.poll import PollOperator, PollSpec
from domain.values import MISSING, json_equals


def condition_met(operator: PollOperator, actual: Any, expected: Any) -> bool:
    if operator is PollOperator.EQUALS:
        return json_equals(actual, expected)
    if operator is PollOperator.NOT_EQUALS:
        return not json_equals(actual, expected)
    if operator is PollOperator.EXISTS:
        return actual is not None and actual is not MISSING
    if operator is PollOperator.NOT_EXISTS:
        return actual is None or actual is MISSING
    raise ValueError(f"Unhandled poll operator: {operator}")


class Poller:
    """
    Re-issues a request until a condition on the response body holds or the
    timeout elapses. Requests are strictly sequential and each retry waits the
    full interval first. A timeout is not an error: the last response wins.
    """

    def poll(
        self,
        spec: PollSpec,
        request: PreparedHttpRequest,
        initial: HttpResponse,
        deps: ExecutionDeps,
    ) -> PollOutcome:
        clock = deps.clock
        started = clock.monotonic_ms()
        response = initial
        attempts = 0

        deps.logger.info(
            "poll.start",
            path=spec.path,
            operator=spec.operator.value,
            timeout_ms=spec.timeout_ms,
            interval_ms=spec.interval_ms,
        )

        if self._check(spec, response):
            deps.logger.info("poll.met", attempts=attempts, elapsed_ms=0)
            return PollOutcome(response=response, met=True, attempts=attempts, elapsed_ms=0)

        while clock.monotonic_ms() - started < spec.timeout_ms:
            clock.sleep_ms(spec.interval_ms)

            response = deps.http_client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                body=request.body,
            )
            attempts += 1
            elapsed = int(clock.monotonic_ms() - started)

            if self._check(spec, response):
                deps.logger.info("poll.met", attempts=attempts, elapsed_ms=elapsed, status=response.status)
                return PollOutcome(response=response, met=True, attempts=attempts, elapsed_ms=elapsed)

            deps.logger.debug("poll.retry", attempts=attempts, elapsed_ms=elapsed, status=response.status)

        elapsed = int(clock.monotonic_ms() - started)
        deps.logger.warning("poll.timeout", attempts=attempts, elapsed_ms=elapsed, path=spec.path)
        return PollOutcome(response=response, met=False, attempts=attempts, elapsed_ms=elapsed)

    def _check(self, spec: PollSpec, response: HttpResponse) -> bool:
        actual = extract_value(response.body, spec.path)
        return condition_met(spec.operator, actual, spec.value)
