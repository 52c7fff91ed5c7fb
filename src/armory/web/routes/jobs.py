"""Repository management and job submission routes.

Every mutating route records a job and answers 202 with its id; the
work itself happens outside the web process.
"""

from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from armory.core.jobs import (
    ImportParams,
    InstallRepoParams,
    JobParams,
    JobQueue,
    MasscanParams,
    NmapParams,
    ReconParams,
    SpiderParams,
)
from armory.core.repos import RepositoryCache
from armory.web.forms import read_form

router = APIRouter()


def _jobs(request: Request) -> JobQueue:
    return request.app.state.jobs


def _repos(request: Request) -> RepositoryCache:
    return request.app.state.repos


def _accepted(request: Request, job: str, args: list[Any]) -> JSONResponse:
    job_id = _jobs(request).enqueue(job, args)
    return JSONResponse(status_code=202, content={"job_id": job_id, "job": job, "args": args})


async def _submit(request: Request, params_cls: type[JobParams]) -> JSONResponse:
    params = params_cls.from_form(await read_form(request))
    return _accepted(request, params.job, params.job_args())


# Repositories


@router.get("/repos")
def list_repos(request: Request) -> dict[str, Any]:
    return {"repos": [repo.to_dict() for repo in _repos(request).installed()]}


@router.post("/repos/install")
async def install_repo(request: Request) -> JSONResponse:
    return await _submit(request, InstallRepoParams)


@router.post("/repos/update")
def update_repos(request: Request) -> JSONResponse:
    return _accepted(request, "update_repos", [])


@router.delete("/repos")
def purge_repos(request: Request) -> JSONResponse:
    return _accepted(request, "purge_repos", [])


@router.get("/repos/{name}")
def show_repo(name: str, request: Request) -> dict[str, Any]:
    return _repos(request).get(name).to_dict()


@router.post("/repos/{name}/update")
def update_repo(name: str, request: Request) -> JSONResponse:
    repo = _repos(request).get(name)
    return _accepted(request, "update_repo", [repo.name])


@router.delete("/repos/{name}")
def remove_repo(name: str, request: Request) -> JSONResponse:
    repo = _repos(request).get(name)
    return _accepted(request, "remove_repo", [repo.name])


# Scans and imports


@router.post("/recon")
async def recon(request: Request) -> JSONResponse:
    return await _submit(request, ReconParams)


@router.post("/nmap")
async def nmap(request: Request) -> JSONResponse:
    return await _submit(request, NmapParams)


@router.post("/masscan")
async def masscan(request: Request) -> JSONResponse:
    return await _submit(request, MasscanParams)


@router.post("/import")
async def import_file(request: Request) -> JSONResponse:
    return await _submit(request, ImportParams)


@router.post("/spider")
async def spider(request: Request) -> JSONResponse:
    return await _submit(request, SpiderParams)


# Jobs


@router.get("/jobs")
def list_jobs(request: Request, limit: int = Query(default=50, ge=1, le=500)) -> dict[str, Any]:
    return {"jobs": [job.to_dict() for job in _jobs(request).recent(limit)]}


@router.get("/jobs/{job_id}")
def show_job(job_id: str, request: Request) -> dict[str, Any]:
    return _jobs(request).get(job_id).to_dict()
