from contextlib import asynccontextmanager
from typing import Optional

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.requests import Request
from fastapi.responses import Response

from pointnotes.config import configure_logging, load_settings
from pointnotes.context import AppContext
from pointnotes.routers import RouteRequest, build_dispatcher

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"]


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    本地开发服务器，行为与 Lambda + API Gateway 一致

    When no context is given it is built from the environment during startup,
    so missing configuration stops the server before it accepts requests.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期管理"""
        logger.info("Starting up application...")
        owned = context is None
        if owned:
            settings = load_settings()
            configure_logging(settings.log_level)
            app_context = AppContext.from_settings(settings)
        else:
            app_context = context
        app.state.context = app_context
        app.state.dispatcher = build_dispatcher(app_context)
        yield
        logger.info("Shutting down application...")
        if owned:
            app_context.close()

    app = FastAPI(
        title="PointNotes_API",
        description="PointNotes API for point cloud annotations",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
    )

    @app.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def dispatch(request: Request) -> Response:
        body = await request.body()
        route_request = RouteRequest(
            method=request.method,
            path=request.url.path,
            query_params=dict(request.query_params),
            body=body or None,
        )
        # storage calls block, keep them off the event loop
        result = await run_in_threadpool(request.app.state.dispatcher.dispatch, route_request)
        return Response(
            content=result.body, status_code=result.status_code, headers=result.headers
        )

    return app


app = create_app()


def run():
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info(f"Local development server running on http://localhost:{settings.port}")
    uvicorn.run("pointnotes.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
