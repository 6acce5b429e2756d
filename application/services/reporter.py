# application/services/reporter.py
"""
Report generation: narrative text, aggregated TestReport, and JSON /
Markdown / ANSI console renderings.
"""
from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from application.services.template_renderer import to_text
from domain.results import AssertionResult, FlowResult, StepResult, TestReport
from domain.steps.base import Step
from domain.values import MISSING, to_json_text, to_plain

_NARRATIVE_PREVIEW = 50


def generate_narrative(results: List[FlowResult]) -> str:
    lines: List[str] = []

    for flow in results:
        icon = "✅" if flow.success else "❌"
        lines.append(f"\n{icon} **{flow.flow.name}**")
        if flow.flow.description:
            lines.append(f"   _{flow.flow.description}_")

        for step in flow.steps:
            lines.append(f"   {'→' if step.success else '✗'} {step.step.name}")

            for name, value in step.captures.items():
                lines.append(f"     📦 {name}: {_preview(value)}")

            for a in step.assertions:
                if not a.success:
                    lines.append(f"     ⚠️ {a.message}")

            if step.error:
                lines.append(f"     ❌ {step.error}")

    return "\n".join(lines)


def generate_report(results: List[FlowResult]) -> TestReport:
    passed = sum(1 for r in results if r.success)
    return TestReport(
        timestamp=datetime.now(timezone.utc),
        duration_ms=sum(r.duration_ms for r in results),
        total_flows=len(results),
        passed_flows=passed,
        failed_flows=len(results) - passed,
        flows=list(results),
        narrative=generate_narrative(results),
    )


# -- serialisation --

def step_to_dict(step: Step) -> Dict[str, Any]:
    req = step.request
    return {
        "name": step.name,
        "description": step.description,
        "request": {"method": req.method.value, "url": req.url},
    }


def assertion_result_to_dict(a: AssertionResult) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "assertion": {
            "path": a.assertion.path,
            "operator": a.assertion.operator.value,
            "value": to_plain(a.assertion.value),
            "message": a.assertion.message,
        },
        "success": a.success,
        "message": a.message,
    }
    if a.actual is not MISSING:
        out["actual"] = to_plain(a.actual)
    return out


def step_result_to_dict(r: StepResult) -> Dict[str, Any]:
    request: Dict[str, Any] = {"method": r.request.method, "url": r.request.url}
    if r.request.body is not MISSING:
        request["body"] = to_plain(r.request.body)

    out: Dict[str, Any] = {
        "step": step_to_dict(r.step),
        "success": r.success,
        "duration": r.duration_ms,
        "request": request,
        "captures": to_plain(r.captures),
        "assertions": [assertion_result_to_dict(a) for a in r.assertions],
    }
    if r.response is not None:
        out["response"] = {
            "status": r.response.status,
            "headers": r.response.headers,
            "body": to_plain(r.response.body),
        }
    if r.error:
        out["error"] = r.error
    return out


def flow_result_to_dict(r: FlowResult) -> Dict[str, Any]:
    return {
        "flow": {
            "name": r.flow.name,
            "description": r.flow.description,
            "tags": sorted(r.flow.tags),
        },
        "success": r.success,
        "duration": r.duration_ms,
        "steps": [step_result_to_dict(s) for s in r.steps],
        "variables": to_plain(r.variables),
    }


def report_to_dict(report: TestReport) -> Dict[str, Any]:
    return {
        "timestamp": report.timestamp.isoformat(),
        "duration": report.duration_ms,
        "totalFlows": report.total_flows,
        "passedFlows": report.passed_flows,
        "failedFlows": report.failed_flows,
        "flows": [flow_result_to_dict(f) for f in report.flows],
        "narrative": report.narrative,
    }


def to_json(report: TestReport) -> str:
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False, default=str)


def to_markdown(report: TestReport) -> str:
    lines: List[str] = [
        "# Test Report",
        "",
        f"**Date:** {report.timestamp.isoformat()}",
        f"**Duration:** {report.duration_ms}ms",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Total | {report.total_flows} |",
        f"| Passed | {report.passed_flows} |",
        f"| Failed | {report.failed_flows} |",
        "",
        "## Narrative",
        "",
        report.narrative,
        "",
    ]

    failed = [f for f in report.flows if not f.success]
    if failed:
        lines.extend(["## Failures", ""])
        for flow in failed:
            lines.extend([f"### {flow.flow.name}", ""])
            for step in flow.steps:
                if step.success:
                    continue
                lines.append(f"**Step:** {step.step.name}")
                if step.error:
                    lines.append(f"- Error: {step.error}")
                for a in step.assertions:
                    if not a.success:
                        lines.append(f"- {a.message}")
                lines.append("")

    return "\n".join(lines)


# -- console --

_RESET = "\x1b[0m"


def _c(code: str, s: str) -> str:
    return f"\x1b[{code}m{s}{_RESET}"


def format_console(report: TestReport) -> str:
    rule = _c("1", "═" * 60)
    lines: List[str] = [
        "",
        rule,
        _c("1", "  TESTFLOW RESULTS"),
        rule,
        "",
        _c("36", "Summary:"),
        f"  Total:    {report.total_flows} flows",
        f"  {_c('32', 'Passed:')}  {report.passed_flows}",
        f"  {_c('31', 'Failed:')}  {report.failed_flows}",
        f"  {_c('2', 'Duration:')} {report.duration_ms}ms",
        "",
        _c("36", "Narrative:"),
        _format_narrative(report.narrative),
    ]

    failed = [f for f in report.flows if not f.success]
    if failed:
        lines.extend(["", _c("31", "Failures:")])
        for flow in failed:
            lines.extend(["", f"  {_c('31', '✗')} {_c('1', flow.flow.name)}"])
            for step in flow.steps:
                if step.success:
                    continue
                lines.append(f"    {_c('33', 'Step:')} {step.step.name}")
                if step.error:
                    lines.append(f"    {_c('31', 'Error:')} {step.error}")
                for a in step.assertions:
                    if not a.success:
                        lines.append(f"    {_c('31', 'Assert:')} {a.message}")
                        lines.append(f"    {_c('2', 'Actual:')} {to_json_text(a.actual)}")

    lines.extend(["", rule, ""])
    return "\n".join(lines)


def _format_narrative(narrative: str) -> str:
    out = re.sub(r"\*\*([^*]+)\*\*", lambda m: _c("1", m.group(1)), narrative)
    return re.sub(r"_([^_]+)_", lambda m: _c("2", m.group(1)), out)


def _preview(value: Any) -> str:
    if value is MISSING:
        return "undefined"
    if isinstance(value, str):
        suffix = "…" if len(value) > _NARRATIVE_PREVIEW else ""
        return value[:_NARRATIVE_PREVIEW] + suffix
    return to_text(value)[:_NARRATIVE_PREVIEW]
