"""Installed plugin repositories.

A repository is a directory under ``repos_dir``. Any of its ``payloads/``,
``encoders/`` and ``exploits/`` subdirectories are plugin roots searched by
the ClassRegistry.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from armory.contracts import PluginKind, RepositoryNotFound
from armory.plugins.loader import list_plugin_files

REPO_NAME_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")


@dataclass(frozen=True)
class Repository:
    """One installed repository."""

    name: str
    path: Path

    def plugin_ids(self, kind: PluginKind) -> list[str]:
        """Identifiers of the plugin files this repository provides for a kind."""
        return list_plugin_files(self.path / kind.value)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "path": str(self.path),
            **{kind.value: self.plugin_ids(kind) for kind in PluginKind},
        }


class RepositoryCache:
    """View over the repositories directory.

    Reads the filesystem on every call so repositories installed or removed
    while the server runs are picked up.
    """

    def __init__(self, repos_dir: Path) -> None:
        self.repos_dir = repos_dir

    def installed(self) -> list[Repository]:
        """Installed repositories, sorted by name."""
        if not self.repos_dir.is_dir():
            return []
        return [
            Repository(name=child.name, path=child)
            for child in sorted(self.repos_dir.iterdir())
            if child.is_dir() and REPO_NAME_PATTERN.fullmatch(child.name)
        ]

    def get(self, name: str) -> Repository:
        """Look up a repository by directory name.

        Raises:
            RepositoryNotFound: If the name is malformed or not installed
        """
        if not REPO_NAME_PATTERN.fullmatch(name):
            raise RepositoryNotFound(name)
        path = self.repos_dir / name
        if not path.is_dir():
            raise RepositoryNotFound(name)
        return Repository(name=name, path=path)

    def search_paths(self) -> list[Path]:
        """Repository roots, for ClassRegistry(search_paths=cache.search_paths)."""
        return [repo.path for repo in self.installed()]
