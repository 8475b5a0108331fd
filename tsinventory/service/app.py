"""FastAPI application exposing the declaration inventory over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import TsInventoryError
from ..logging import get_logger
from ..models import AnalysisResult
from ..orchestrator import Orchestrator

logger = get_logger("service")


class AnalyzeRequest(BaseModel):
    repoUrl: Optional[str] = None


class DeclarationPayload(BaseModel):
    name: Optional[str] = None
    sourceText: str


class FileAnalysisPayload(BaseModel):
    filePath: str
    functions: List[DeclarationPayload] = []
    arrowFunctions: List[DeclarationPayload] = []
    reactComponents: List[DeclarationPayload] = []
    classes: List[DeclarationPayload] = []
    interfaces: List[DeclarationPayload] = []
    enums: List[DeclarationPayload] = []
    typeAliases: List[DeclarationPayload] = []


class AnalyzeResponse(BaseModel):
    files: List[FileAnalysisPayload] = []


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator(allow_local=False)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing the analyze endpoint."""

    app = FastAPI(title="TS Inventory Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh instance per request; nothing is shared between analyses.
        try:
            return orchestrator_factory()
        except TsInventoryError:
            raise
        except Exception as exc:
            logger.exception("Failed to prepare analysis")
            raise TsInventoryError("Internal error while preparing analysis") from exc

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post(
        "/analyze",
        response_model=AnalyzeResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ):
        repo_url = (payload.repoUrl or "").strip()
        if not repo_url:
            return JSONResponse(status_code=400, content={"error": "repoUrl is required"})

        def _run() -> AnalysisResult:
            return orchestrator.run_analysis(repo_url)

        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, _run)
        except TsInventoryError as exc:
            logger.warning("Analysis failed: %s", exc)
            return JSONResponse(status_code=500, content={"error": str(exc)})
        except Exception:
            logger.exception("Unexpected failure while analyzing repository")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal error while analyzing repository"},
            )
        return AnalyzeResponse.model_validate(result.to_dict())

    @app.exception_handler(TsInventoryError)
    async def inventory_error_handler(_: Any, exc: TsInventoryError) -> JSONResponse:
        logger.warning("Request failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 3000,
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(orchestrator_factory)
    logger.info("Server listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
