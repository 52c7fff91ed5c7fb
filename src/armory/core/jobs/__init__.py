"""Background job recording: parameters, storage and the queue."""

from armory.core.jobs.database import JobsDB
from armory.core.jobs.params import (
    ImportParams,
    InstallRepoParams,
    JobParams,
    MasscanParams,
    NmapParams,
    ReconParams,
    SpiderParams,
)
from armory.core.jobs.queue import JOB_NAMES, Job, JobQueue

__all__ = [
    "JOB_NAMES",
    "ImportParams",
    "InstallRepoParams",
    "Job",
    "JobParams",
    "JobQueue",
    "JobsDB",
    "MasscanParams",
    "NmapParams",
    "ReconParams",
    "SpiderParams",
]
