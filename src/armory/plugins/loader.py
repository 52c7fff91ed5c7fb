"""Loading plugin classes from repository files.

A plugin repository keeps one plugin per file under a directory per kind:

    <repo>/payloads/cmd/bind_shell.py   -> payload "cmd/bind_shell"
    <repo>/encoders/rot13.py            -> encoder "rot13"

A file defines a class that:
1. Inherits from the kind's base class (BasePayload, BaseEncoder, ...)
2. Has an ``id`` class attribute equal to the identifier its path maps to
3. Is not abstract
"""

import importlib.util
import inspect
import logging
from pathlib import Path

from armory.contracts import ClassNotFound, PluginLoadError
from armory.plugins.identifiers import IDENTIFIER_PATTERN, PluginIdentifier

logger = logging.getLogger(__name__)

# Files that are never plugin definitions
EXCLUDED_FILES: frozenset[str] = frozenset(
    {
        "__init__.py",
        "conftest.py",
        "setup.py",
    }
)


def find_plugin_file(kind_dir: Path, identifier: PluginIdentifier) -> Path | None:
    """Locate the file defining ``identifier`` inside ``kind_dir``.

    Returns None when no such file exists, or when the file resolves (via
    symlinks) to a location outside ``kind_dir``.
    """
    if not kind_dir.is_dir():
        return None

    candidate = kind_dir / identifier.relative_path()
    if not candidate.is_file():
        return None

    root = kind_dir.resolve()
    resolved = candidate.resolve()
    if not resolved.is_relative_to(root):
        logger.warning(
            "Plugin file %s resolves outside %s - refusing to load", candidate, root
        )
        return None
    return resolved


def load_plugin_class(
    py_file: Path,
    identifier: PluginIdentifier,
    base_class: type,
) -> type:
    """Import ``py_file`` and return the class registered as ``identifier``.

    Args:
        py_file: Path to the plugin file
        identifier: Identifier the file was located by
        base_class: Base class the plugin must inherit from

    Returns:
        The plugin class

    Raises:
        PluginLoadError: If the file cannot be imported
        ClassNotFound: If the file imports but defines no matching class
    """
    kind_name = base_class.kind.value  # type: ignore[attr-defined]
    # Include kind and every segment in the module name so that
    # payloads/cmd/shell.py and encoders/shell.py do not collide
    dotted = ".".join(seg.replace("-", "_") for seg in identifier.segments)
    module_name = f"armory.plugins._loaded.{kind_name}.{dotted}"

    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        raise PluginLoadError(str(identifier), str(py_file), "not an importable module")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        # Syntax errors are plugin bugs - surface them to the developer
        logger.error("Syntax error in plugin file %s: %s", py_file, e)
        raise PluginLoadError(str(identifier), str(py_file), f"syntax error: {e}") from e
    except Exception as e:
        # Import-time failures of third-party plugin code (missing optional
        # dependencies, raising module bodies) are load errors, not 404s
        logger.error("Import error loading plugin file %s: %s", py_file, e)
        raise PluginLoadError(str(identifier), str(py_file), str(e)) from e

    wanted = str(identifier)
    for name, obj in inspect.getmembers(module, inspect.isclass):
        # Must be defined in this module (not imported)
        if obj.__module__ != module.__name__:
            continue

        # Must inherit from base_class (but not BE base_class)
        if not issubclass(obj, base_class) or obj is base_class:
            continue

        if inspect.isabstract(obj):
            continue

        # NOTE: getattr at a PLUGIN LOADING TRUST BOUNDARY - arbitrary
        # repository code may omit the attribute
        plugin_id = getattr(obj, "id", None)
        if not plugin_id:
            logger.warning(
                "Class %s in %s inherits from %s but has no/empty 'id' attribute - skipping",
                name,
                py_file,
                base_class.__name__,
            )
            continue

        if plugin_id == wanted:
            return obj

    logger.warning("Plugin file %s does not define %s %r", py_file, kind_name, wanted)
    raise ClassNotFound(wanted, base_class.kind.singular)  # type: ignore[attr-defined]


def list_plugin_files(kind_dir: Path) -> list[str]:
    """List identifiers of plugin files under ``kind_dir`` (recursive).

    Files whose relative path does not form a valid identifier are skipped.
    """
    if not kind_dir.is_dir():
        return []

    identifiers: list[str] = []
    for py_file in sorted(kind_dir.rglob("*.py")):
        if py_file.name in EXCLUDED_FILES:
            continue
        relative = py_file.relative_to(kind_dir).with_suffix("")
        candidate = "/".join(relative.parts)
        if IDENTIFIER_PATTERN.fullmatch(candidate) is None:
            logger.debug("Skipping %s: not a valid plugin identifier", py_file)
            continue
        identifiers.append(candidate)
    return identifiers
