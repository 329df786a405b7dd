"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request, Response

from goraph import __version__
from goraph.web.api import router


def create_app(target_path: Path | str = ".") -> FastAPI:
    app = FastAPI(title="goraph", version=__version__)
    app.state.target_path = Path(target_path)

    @app.middleware("http")
    async def no_cache_index(request: Request, call_next):
        response: Response = await call_next(request)
        if request.url.path == "/":
            response.headers["Cache-Control"] = "no-cache"
        return response

    app.include_router(router)
    return app
