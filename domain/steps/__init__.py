from domain.steps.base import Step
from domain.steps.http import HttpMethod, HttpRequestSpec, GraphQLRequestSpec
from domain.steps.capture import CaptureSpec
from domain.steps.assertion import AssertionOperator, AssertionSpec
from domain.steps.poll import PollOperator, PollSpec

__all__ = [
    "Step",
    "HttpMethod",
    "HttpRequestSpec",
    "GraphQLRequestSpec",
    "CaptureSpec",
    "AssertionOperator",
    "AssertionSpec",
    "PollOperator",
    "PollSpec",
]
