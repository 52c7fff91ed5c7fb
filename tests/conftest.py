# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/
"""

import logging
import os
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from armory.plugins import ClassRegistry, PluginPipeline

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Plugin fixtures
# =============================================================================

WritePlugin = Callable[[str, str, str], Path]


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """An empty plugin repository."""
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture
def write_plugin(repo_dir: Path) -> WritePlugin:
    """Write a plugin file into ``repo_dir``.

    Usage:
        write_plugin("payloads", "test/echo", '''
            class Echo(BasePayload):
                id = "test/echo"
                ...
        ''')

    The source is dedented and prefixed with the usual plugin imports.
    """

    def write(kind_dir: str, identifier: str, source: str) -> Path:
        path = repo_dir / kind_dir / f"{identifier}.py"
        path.parent.mkdir(parents=True, exist_ok=True)
        header = (
            "from armory.contracts import ParamError, PluginValidationError\n"
            "from armory.plugins import BaseEncoder, BaseExploit, BasePayload, Param\n\n"
        )
        path.write_text(header + textwrap.dedent(source))
        return path

    return write


@pytest.fixture
def registry(repo_dir: Path) -> ClassRegistry:
    """Registry with the built-in plugins that also searches ``repo_dir``."""
    reg = ClassRegistry(search_paths=[repo_dir])
    reg.register_builtin_plugins()
    return reg


@pytest.fixture
def pipeline(registry: ClassRegistry) -> PluginPipeline:
    return PluginPipeline(registry)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo configure_logging() so later tests never write to closed streams.

    The CLI and logging tests configure logging against captured stderr.
    """
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
