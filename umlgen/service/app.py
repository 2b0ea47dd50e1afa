"""FastAPI application exposing snapshot generation."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError
from ..orchestrator import UmlGenerator


class GenerateRequest(BaseModel):
    path: str
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    project_name: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_generator() -> UmlGenerator:
    return UmlGenerator()


def create_app(
    generator_factory: Callable[[], UmlGenerator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application serving UML snapshots."""
    app = FastAPI(title="umlgen", version="6.0")

    async def get_generator() -> UmlGenerator:
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate")
    async def generate(
        payload: GenerateRequest,
        generator: UmlGenerator = Depends(get_generator),
    ) -> Dict[str, Any]:
        def _run() -> Dict[str, Any]:
            outcome = generator.generate(
                payload.path,
                include=payload.include,
                exclude=payload.exclude,
                project_name=payload.project_name,
            )
            return outcome.snapshot.to_dict()

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["GenerateRequest", "create_app", "run_service"]
