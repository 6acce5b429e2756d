"""FastAPI application - run flows over HTTP"""
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

import sys

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from api.runner import build_flow_executor
from application.ports.http_client import HttpClientPort
from application.ports.logger import LoggerPort
from application.services.reporter import flow_result_to_dict
from domain.context import AiConfig, AiProvider, ProjectContext
from domain.exceptions import FlowValidationError
from infrastructure.ai.factory import build_ai_evaluator
from infrastructure.config.settings import Settings, resolve_ai_config
from infrastructure.flow.yaml_loader import YamlFlowLoader
from infrastructure.http.requests_client import RequestsSessionHttpClient
from infrastructure.logging.loguru_logger import LoguruLogger


class ContextModel(BaseModel):
    """Subset of the project context needed to run a flow"""
    name: str = Field(default="API", description="Project name")
    base_urls: Dict[str, str] = Field(default_factory=dict, description="Named base URLs; the first is the default")


class AiConfigModel(BaseModel):
    provider: AiProvider = Field(default=AiProvider.OLLAMA)
    url: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None


class RunFlowRequest(BaseModel):
    """Flow run request"""
    flow: Dict[str, Any] = Field(description="Flow definition, same shape as the YAML format")
    context: Optional[ContextModel] = Field(default=None, description="Base URLs for {key} prefixes")
    ai: Optional[AiConfigModel] = Field(default=None, description="AI provider for ai-evaluate assertions")


class RunFlowResponse(BaseModel):
    """Flow run response"""
    run_id: str = Field(description="Run identifier")
    success: bool = Field(description="True when every step passed")
    result: Dict[str, Any] = Field(description="Serialised FlowResult")


app = FastAPI(
    title="Testflow Runner",
    description="Declarative API test flows",
    version="1.0.0",
)


def get_http_client() -> Iterator[HttpClientPort]:
    client = RequestsSessionHttpClient(timeout_sec=get_settings().http_timeout_sec)
    try:
        yield client
    finally:
        client.close()


def get_logger() -> LoggerPort:
    return LoguruLogger()


def get_settings() -> Settings:
    return Settings.load()


@app.get("/")
def read_root():
    """ヘルスチェック"""
    return {"status": "ok", "service": "testflow"}


@app.post("/flows/run", response_model=RunFlowResponse)
def run_flow(
    request: RunFlowRequest,
    http_client: HttpClientPort = Depends(get_http_client),
    logger: LoggerPort = Depends(get_logger),
    settings: Settings = Depends(get_settings),
) -> RunFlowResponse:
    """
    Run one flow synchronously and return its result.
    A failing flow is still HTTP 200; only a malformed flow is rejected.
    """
    try:
        flow = YamlFlowLoader().load_from_dict(request.flow)
    except FlowValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    context = None
    if request.context is not None:
        context = ProjectContext(name=request.context.name, base_urls=dict(request.context.base_urls))

    explicit_ai = None
    if request.ai is not None:
        explicit_ai = AiConfig(
            provider=request.ai.provider,
            url=request.ai.url or "",
            model=request.ai.model or "",
            api_key=request.ai.api_key,
        )

    run_id = uuid4().hex
    logger = logger.bind(api_run_id=run_id)
    logger.info("api.run.start", flow=flow.name)

    executor = build_flow_executor(
        http_client=http_client,
        logger=logger,
        context=context,
        ai_evaluator=build_ai_evaluator(resolve_ai_config(explicit_ai, settings.ai_config())),
    )
    result = executor.execute_flow(flow)

    logger.info("api.run.end", ok=result.success, elapsed_ms=result.duration_ms)
    return RunFlowResponse(run_id=run_id, success=result.success, result=flow_result_to_dict(result))
