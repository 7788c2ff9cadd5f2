"""FastAPI application serving the aggregated projects."""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from projects_api.api.schemas import ErrorResponse, HealthResponse, ProjectResponse
from projects_api.config import Settings
from projects_api.container import build_project_cache
from projects_api.domain.catalog_interface import IProjectCatalog


logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Project not found"

CatalogFactory = Callable[[Settings], IProjectCatalog]


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})


async def _warm_cache(catalog: IProjectCatalog) -> None:
    try:
        projects = await catalog.list_all()
        logger.info(f"Warm-up loaded {len(projects)} projects")
    except Exception as e:
        logger.error(f"Cache warm-up failed: {e}", exc_info=True)


def get_catalog(request: Request) -> IProjectCatalog:
    return request.app.state.catalog


def create_app(
    settings: Optional[Settings] = None,
    catalog_factory: CatalogFactory = build_project_cache,
) -> FastAPI:
    """Create the FastAPI application exposing the project catalog.

    The catalog is built once here and shared by every request, so
    concurrent requests on a cold cache wait on a single refresh.
    """
    settings = settings or Settings.from_env()
    catalog = catalog_factory(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        warm_up: Optional[asyncio.Task] = None
        if settings.warm_cache_on_startup:
            warm_up = asyncio.create_task(_warm_cache(catalog))
        try:
            yield
        finally:
            if warm_up is not None and not warm_up.done():
                warm_up.cancel()
            await catalog.close()

    app = FastAPI(
        title="Projects API",
        version="1.0.0",
        docs_url="/",
        lifespan=lifespan
    )
    app.state.catalog = catalog

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"]
    )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get(
        "/projects",
        responses={404: {"model": ErrorResponse}},
        summary="Get all projects, or the one whose URL contains `name`"
    )
    async def list_projects(
        name: Optional[str] = None,
        catalog: IProjectCatalog = Depends(get_catalog),
    ) -> JSONResponse:
        if name:
            project = await catalog.find_by_url_fragment(name)
            if project is None:
                return _not_found()
            return JSONResponse(
                content=ProjectResponse.from_project(project).model_dump(by_alias=True)
            )

        projects = await catalog.list_all()
        return JSONResponse(
            content=[
                ProjectResponse.from_project(project).model_dump(by_alias=True)
                for project in projects
            ]
        )

    @app.get(
        "/projects/{name}",
        responses={404: {"model": ErrorResponse}},
        summary="Get a project by name, ignoring case"
    )
    async def get_project(
        name: str,
        catalog: IProjectCatalog = Depends(get_catalog),
    ) -> JSONResponse:
        project = await catalog.find_by_name(name)
        if project is None:
            return _not_found()
        return JSONResponse(
            content=ProjectResponse.from_project(project).model_dump(by_alias=True)
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_: Any, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500, content={"status": "error", "message": str(exc)}
        )

    return app
