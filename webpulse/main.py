import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from webpulse.config import Settings
from webpulse.database import AppContext
from webpulse.logging_setup import setup_logging
# Register every mapped class before any relationship is configured
from webpulse.models import project, task, team, user  # noqa: F401
from webpulse.routers.auth import router as auth_router
from webpulse.routers.graphql import router as graphql_router
from webpulse.routers.overview import router as overview_router

logger = logging.getLogger(__name__)

# First path segments owned by the API, never answered with the client bundle
API_PATHS = frozenset({"graphql", "token", "overview", "health", "docs", "redoc", "openapi.json"})


def mount_client(app: FastAPI, dist: Path) -> None:
    """Serve the built client bundle for every path the API does not own."""
    dist = dist.resolve()
    index = dist / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def client_bundle(full_path: str):
        if full_path.split("/", 1)[0] in API_PATHS:
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        candidate = (dist / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(dist):
            return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        return JSONResponse(status_code=404, content={"detail": "Client bundle not built"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    context = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL)
        await context.create_all()
        logger.info(
            "API server ready on port %s (%s); GraphQL at /graphql",
            settings.PORT, settings.ENVIRONMENT,
        )
        yield
        await context.dispose()

    app = FastAPI(
        lifespan=lifespan,
        title="WebPulse API",
        description="Teams, projects and tasks over GraphQL",
        version="1.0.0",
    )
    app.state.context = context

    # Enable CORS for the frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex="https?://.*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error", "error": str(exc)},
        )

    app.include_router(graphql_router)
    app.include_router(auth_router)
    app.include_router(overview_router)

    @app.get("/health")
    def health():
        return {"message": "WebPulse API running"}

    if settings.is_production:
        mount_client(app, settings.CLIENT_DIST)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("webpulse.main:app", host="0.0.0.0", port=app.state.context.settings.PORT)
