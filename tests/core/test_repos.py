"""Tests for the installed repository view."""

from pathlib import Path

import pytest


class TestRepositoryCache:
    """Listing and looking up repositories."""

    def _make_repos(self, root: Path) -> None:
        (root / "alpha" / "payloads" / "cmd").mkdir(parents=True)
        (root / "alpha" / "payloads" / "cmd" / "knock.py").write_text("")
        (root / "beta" / "encoders").mkdir(parents=True)
        (root / "beta" / "encoders" / "rot13.py").write_text("")
        (root / ".hidden").mkdir()
        (root / "README").write_text("not a repo")

    def test_list(self, tmp_path: Path) -> None:
        from armory.core.repos import RepositoryCache

        self._make_repos(tmp_path)
        cache = RepositoryCache(tmp_path)

        assert [repo.name for repo in cache.installed()] == ["alpha", "beta"]
        assert cache.search_paths() == [tmp_path / "alpha", tmp_path / "beta"]

    def test_missing_repos_dir(self, tmp_path: Path) -> None:
        from armory.core.repos import RepositoryCache

        assert RepositoryCache(tmp_path / "nope").installed() == []

    def test_get(self, tmp_path: Path) -> None:
        from armory.core.repos import RepositoryCache

        self._make_repos(tmp_path)
        repo = RepositoryCache(tmp_path).get("alpha")

        assert repo.to_dict() == {
            "name": "alpha",
            "path": str(tmp_path / "alpha"),
            "payloads": ["cmd/knock"],
            "encoders": [],
            "exploits": [],
        }

    @pytest.mark.parametrize("name", ["gamma", "..", ".hidden", "alpha/payloads", ""])
    def test_get_not_found(self, tmp_path: Path, name: str) -> None:
        from armory.contracts import RepositoryNotFound
        from armory.core.repos import RepositoryCache

        self._make_repos(tmp_path)

        with pytest.raises(RepositoryNotFound):
            RepositoryCache(tmp_path).get(name)

    def test_registry_searches_installed_repos(self, tmp_path: Path) -> None:
        from armory.contracts import PluginKind
        from armory.core.repos import RepositoryCache
        from armory.plugins import ClassRegistry

        cache = RepositoryCache(tmp_path)
        registry = ClassRegistry(search_paths=cache.search_paths)

        assert registry.list_ids(PluginKind.ENCODER) == []
        self._make_repos(tmp_path)
        assert registry.list_ids(PluginKind.ENCODER) == ["rot13"]

    def test_annotations_resolve_to_builtins(self) -> None:
        import typing

        from armory.core.jobs.queue import Job, JobQueue
        from armory.core.repos import Repository, RepositoryCache

        assert typing.get_type_hints(RepositoryCache.installed)["return"] == list[Repository]
        assert typing.get_type_hints(RepositoryCache.search_paths)["return"] == list[Path]
        assert typing.get_type_hints(JobQueue.recent)["return"] == list[Job]
