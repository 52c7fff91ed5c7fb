"""Background job queue.

Jobs are recorded, not executed: workers that pick jobs up are outside
this package. Arguments are stored as canonical JSON (RFC 8785) so the
same request always yields the same stored text.
"""

import json
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import rfc8785
import structlog
from sqlalchemy import select

from armory.contracts import JobNotFound, JobStatus
from armory.core.jobs.database import JobsDB
from armory.core.jobs.schema import jobs_table

logger = structlog.get_logger()

JOB_NAMES = frozenset(
    {
        "install_repo",
        "update_repo",
        "update_repos",
        "remove_repo",
        "purge_repos",
        "recon",
        "nmap",
        "masscan",
        "import",
        "spider",
    }
)


def _now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(UTC)


def _generate_id() -> str:
    """Generate a unique ID."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Job:
    """A recorded job."""

    job_id: str
    name: str
    args: list[Any]
    status: JobStatus
    enqueued_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "job_id": self.job_id,
            "name": self.name,
            "args": self.args,
            "status": self.status.value,
            "enqueued_at": self.enqueued_at.isoformat(),
        }


class JobQueue:
    """Records jobs in the jobs table."""

    def __init__(self, db: JobsDB) -> None:
        self._db = db

    def enqueue(self, name: str, args: list[Any] | tuple[Any, ...] = ()) -> str:
        """Record a queued job.

        Args:
            name: Job name (one of JOB_NAMES)
            args: JSON-serializable positional arguments for the worker

        Returns:
            The new job id

        Raises:
            ValueError: If the job name is unknown
        """
        if name not in JOB_NAMES:
            raise ValueError(f"unknown job: {name!r}")

        job_id = _generate_id()
        args_json = rfc8785.dumps(list(args)).decode("utf-8")
        with self._db.connection() as conn:
            conn.execute(
                jobs_table.insert().values(
                    job_id=job_id,
                    name=name,
                    args_json=args_json,
                    status=JobStatus.QUEUED.value,
                    enqueued_at=_now(),
                )
            )
        logger.info("Job enqueued", job=name, job_id=job_id)
        return job_id

    def get(self, job_id: str) -> Job:
        """Get a job by id.

        Raises:
            JobNotFound: If no job has this id
        """
        with self._db.connection() as conn:
            row = conn.execute(select(jobs_table).where(jobs_table.c.job_id == job_id)).fetchone()
        if row is None:
            raise JobNotFound(job_id)
        return self._to_job(row)

    def recent(self, limit: int = 50) -> list[Job]:
        """Most recently enqueued jobs first."""
        query = select(jobs_table).order_by(jobs_table.c.enqueued_at.desc()).limit(limit)
        with self._db.connection() as conn:
            rows = conn.execute(query).fetchall()
        return [self._to_job(row) for row in rows]

    @staticmethod
    def _to_job(row: Any) -> Job:
        return Job(
            job_id=row.job_id,
            name=row.name,
            args=json.loads(row.args_json),
            status=JobStatus(row.status),
            enqueued_at=row.enqueued_at,
        )
