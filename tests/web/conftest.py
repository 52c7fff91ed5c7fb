"""Fixtures for web route tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from armory.core.config import ArmorySettings
from armory.core.jobs import JobQueue, JobsDB
from armory.plugins import ClassRegistry


@pytest.fixture
def repos_root(tmp_path: Path, repo_dir: Path) -> Path:
    """Directory of installed repositories; ``repo_dir`` is installed as "repo"."""
    return repo_dir.parent


@pytest.fixture
def job_queue() -> Iterator[JobQueue]:
    with JobsDB.in_memory() as db:
        yield JobQueue(db)


@pytest.fixture
def client(repos_root: Path, registry: ClassRegistry, job_queue: JobQueue) -> TestClient:
    from armory.web.app import create_app

    settings = ArmorySettings(repos_dir=repos_root)
    app = create_app(settings, registry=registry, queue=job_queue)
    return TestClient(app)
