"""FastAPI application factory.

Shared objects live on ``app.state``:

- registry: ClassRegistry (built-in plugins plus installed repositories)
- pipeline: PluginPipeline over the registry
- repos: RepositoryCache for ``settings.repos_dir``
- jobs: JobQueue backed by ``settings.database``
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from armory import __version__
from armory.contracts import (
    ArmoryError,
    ClassNotFound,
    JobNotFound,
    JobParamsError,
    PluginLoadError,
    RepositoryNotFound,
    UnsupportedParamKind,
)
from armory.core.config import ArmorySettings
from armory.core.jobs import JobQueue, JobsDB
from armory.core.repos import RepositoryCache
from armory.plugins import ClassRegistry, PluginPipeline
from armory.web.routes import jobs, plugins

logger = structlog.get_logger()

SECTIONS = ("/payloads", "/payloads/encoders", "/exploits", "/repos", "/jobs")


def error_body(exc: Exception, **extra: object) -> dict[str, object]:
    return {"error": type(exc).__name__, "message": str(exc), **extra}


def create_app(
    settings: ArmorySettings | None = None,
    *,
    registry: ClassRegistry | None = None,
    queue: JobQueue | None = None,
) -> FastAPI:
    """Build the web application.

    Args:
        settings: Application settings (defaults when omitted)
        registry: Registry to serve; by default one with the built-in
            plugins that also searches the installed repositories
        queue: Job queue; by default one on ``settings.database.url``
    """
    settings = settings or ArmorySettings()
    repos = RepositoryCache(settings.repos_dir)

    if registry is None:
        registry = ClassRegistry(search_paths=repos.search_paths)
        registry.register_builtin_plugins()
    if queue is None:
        queue = JobQueue(JobsDB.from_url(settings.database.url, echo=settings.database.echo))

    app = FastAPI(title="Armory", version=__version__)
    app.state.settings = settings
    app.state.registry = registry
    app.state.pipeline = PluginPipeline(registry, reload_plugins=settings.reload_plugins)
    app.state.repos = repos
    app.state.jobs = queue

    @app.exception_handler(ClassNotFound)
    @app.exception_handler(RepositoryNotFound)
    @app.exception_handler(JobNotFound)
    async def not_found_handler(request: Request, exc: ArmoryError) -> JSONResponse:
        return JSONResponse(status_code=404, content=error_body(exc))

    @app.exception_handler(JobParamsError)
    async def job_params_handler(request: Request, exc: JobParamsError) -> JSONResponse:
        errors = [error.to_dict() for error in exc.errors]
        return JSONResponse(status_code=400, content=error_body(exc, errors=errors))

    @app.exception_handler(PluginLoadError)
    @app.exception_handler(UnsupportedParamKind)
    async def plugin_defect_handler(request: Request, exc: ArmoryError) -> JSONResponse:
        logger.error("Plugin defect", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content=error_body(exc))

    @app.get("/")
    def index() -> dict[str, object]:
        return {"name": "armory", "version": __version__, "sections": list(SECTIONS)}

    app.include_router(plugins.router)
    app.include_router(jobs.router)
    return app
