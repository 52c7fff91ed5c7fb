"""pluggy hook specifications for Armory plugins.

Plugin packages implement these hooks to register plugin classes with the
registry at startup.

Usage (implementing a plugin package):
    from armory.plugins.hookspecs import hookimpl

    class MyPlugins:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def armory_get_encoders(self):
            return [MyEncoder]

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from armory.plugins.base import BaseEncoder, BaseExploit, BasePayload

# Project name for pluggy
PROJECT_NAME = "armory"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class ArmoryPayloadSpec:
    """Hook specifications for payload plugins."""

    @hookspec
    def armory_get_payloads(self) -> list[type["BasePayload"]]:  # type: ignore[empty-body]
        """Return payload plugin classes (not instances)."""


class ArmoryEncoderSpec:
    """Hook specifications for encoder plugins."""

    @hookspec
    def armory_get_encoders(self) -> list[type["BaseEncoder"]]:  # type: ignore[empty-body]
        """Return encoder plugin classes."""


class ArmoryExploitSpec:
    """Hook specifications for exploit plugins."""

    @hookspec
    def armory_get_exploits(self) -> list[type["BaseExploit"]]:  # type: ignore[empty-body]
        """Return exploit plugin classes."""
