"""Class registry for payload, encoder and exploit plugins.

Built-in and package-provided plugins register through pluggy hooks at
startup. Plugins living in installed repositories are loaded lazily, the
first time their identifier is resolved.

Usage:
    registry = ClassRegistry(search_paths=[Path("~/.armory/repos/mine")])
    registry.register_builtin_plugins()

    encoder_cls = registry.resolve("base64", PluginKind.ENCODER)
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pluggy
import structlog

from armory.contracts import ClassNotFound, InvalidIdentifier, PluginKind
from armory.plugins.base import BaseEncoder, BaseExploit, BasePayload, BasePlugin
from armory.plugins.hookspecs import (
    PROJECT_NAME,
    ArmoryEncoderSpec,
    ArmoryExploitSpec,
    ArmoryPayloadSpec,
)
from armory.plugins.identifiers import PluginIdentifier
from armory.plugins.loader import find_plugin_file, list_plugin_files, load_plugin_class

logger = structlog.get_logger()

BASE_CLASSES: dict[PluginKind, type[BasePlugin]] = {
    PluginKind.PAYLOAD: BasePayload,
    PluginKind.ENCODER: BaseEncoder,
    PluginKind.EXPLOIT: BaseExploit,
}

SearchPaths = Iterable[Path] | Callable[[], Iterable[Path]]


class ClassRegistry:
    """Maps (kind, identifier) to plugin classes.

    Resolution is a pure lookup: built-in registrations first, then the
    lazy-load cache, then repository files. A repository file is imported
    at most once per process in the common case; when two requests race on
    the same first load, the first class stored wins and both callers get it.
    """

    def __init__(self, search_paths: SearchPaths = ()) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)

        # Register hookspecs
        self._pm.add_hookspecs(ArmoryPayloadSpec)
        self._pm.add_hookspecs(ArmoryEncoderSpec)
        self._pm.add_hookspecs(ArmoryExploitSpec)

        self._search_paths = search_paths
        self._registered: dict[PluginKind, dict[str, type[BasePlugin]]] = {
            kind: {} for kind in PluginKind
        }
        self._loaded: dict[tuple[PluginKind, str], type[BasePlugin]] = {}

    def register_builtin_plugins(self) -> None:
        """Register the plugins shipped with Armory.

        Call this once at startup.
        """
        from armory.plugins.encoders.hookimpl import builtin_encoders
        from armory.plugins.exploits.hookimpl import builtin_exploits
        from armory.plugins.payloads.hookimpl import builtin_payloads

        self.register(builtin_payloads)
        self.register(builtin_encoders)
        self.register(builtin_exploits)

    def register(self, plugin: Any) -> None:
        """Register a hook implementer.

        Args:
            plugin: Object implementing one or more armory_get_* hooks
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            # Keep the registry consistent with its caches
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        """Rebuild the registered-class maps from hooks.

        Raises:
            ValueError: If an id is registered twice for a kind, or a class
                does not inherit from the kind's base class
        """
        hooks = {
            PluginKind.PAYLOAD: self._pm.hook.armory_get_payloads,
            PluginKind.ENCODER: self._pm.hook.armory_get_encoders,
            PluginKind.EXPLOIT: self._pm.hook.armory_get_exploits,
        }

        new_registered: dict[PluginKind, dict[str, type[BasePlugin]]] = {}
        for kind, hook in hooks.items():
            base_class = BASE_CLASSES[kind]
            classes: dict[str, type[BasePlugin]] = {}
            for batch in hook():
                for cls in batch:
                    if not (isinstance(cls, type) and issubclass(cls, base_class)):
                        raise ValueError(
                            f"{cls!r} registered as {kind.singular} but does not "
                            f"inherit from {base_class.__name__}"
                        )
                    try:
                        plugin_id = str(PluginIdentifier.parse(cls.id, kind.singular))
                    except (AttributeError, InvalidIdentifier):
                        raise ValueError(
                            f"{cls.__name__} must define a valid 'id' attribute "
                            f"(lowercase segments joined by '/')"
                        ) from None
                    if plugin_id in classes:
                        raise ValueError(
                            f"Duplicate {kind.singular} plugin id: '{plugin_id}'. "
                            f"Already registered by {classes[plugin_id].__name__}"
                        )
                    classes[plugin_id] = cls
            new_registered[kind] = classes

        # All validated, update caches
        self._registered = new_registered

    def search_paths(self) -> list[Path]:
        """Repository roots searched for lazily loaded plugins."""
        paths = self._search_paths() if callable(self._search_paths) else self._search_paths
        return [Path(p) for p in paths]

    def resolve(
        self,
        identifier: str | PluginIdentifier,
        kind: PluginKind,
    ) -> type[BasePlugin]:
        """Resolve an identifier to a plugin class of the given kind.

        Raises:
            InvalidIdentifier: If the identifier is malformed (nothing is
                looked up or loaded)
            ClassNotFound: If no class is registered under the identifier
            PluginLoadError: If a matching file exists but fails to import
        """
        if not isinstance(identifier, PluginIdentifier):
            identifier = PluginIdentifier.parse(identifier, kind.singular)
        key = str(identifier)

        registered = self._registered[kind].get(key)
        if registered is not None:
            return registered

        cached = self._loaded.get((kind, key))
        if cached is not None:
            return cached

        for root in self.search_paths():
            py_file = find_plugin_file(root / kind.value, identifier)
            if py_file is None:
                continue
            loaded = load_plugin_class(py_file, identifier, BASE_CLASSES[kind])
            winner = self._loaded.setdefault((kind, key), loaded)
            logger.info("Plugin loaded", kind=kind.singular, id=key, path=str(py_file))
            return winner

        raise ClassNotFound(key, kind.singular)

    def list_ids(self, kind: PluginKind) -> list[str]:
        """All identifiers resolvable for a kind, sorted."""
        ids = set(self._registered[kind])
        for root in self.search_paths():
            ids.update(list_plugin_files(root / kind.value))
        return sorted(ids)

    def clear_loaded(self) -> None:
        """Forget lazily loaded classes so files are re-imported on next use."""
        self._loaded = {}
