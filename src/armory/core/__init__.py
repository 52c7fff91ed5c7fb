"""Core infrastructure: configuration, logging, repositories, jobs."""

from armory.core.config import ArmorySettings, load_settings
from armory.core.logging import configure_logging
from armory.core.repos import Repository, RepositoryCache

__all__ = [
    "ArmorySettings",
    "Repository",
    "RepositoryCache",
    "configure_logging",
    "load_settings",
]
