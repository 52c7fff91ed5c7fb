"""Hook implementation for built-in exploit plugins."""

from typing import Any

from armory.plugins.hookspecs import hookimpl


class ArmoryBuiltinExploits:
    """Hook implementer for built-in exploit plugins."""

    @hookimpl
    def armory_get_exploits(self) -> list[type[Any]]:
        """Return built-in exploit plugin classes."""
        from armory.plugins.exploits.path_traversal import HTTPPathTraversal

        return [HTTPPathTraversal]


# Singleton instance for registration
builtin_exploits = ArmoryBuiltinExploits()
