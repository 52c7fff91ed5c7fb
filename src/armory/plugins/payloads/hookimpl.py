"""Hook implementation for built-in payload plugins."""

from typing import Any

from armory.plugins.hookspecs import hookimpl


class ArmoryBuiltinPayloads:
    """Hook implementer for built-in payload plugins."""

    @hookimpl
    def armory_get_payloads(self) -> list[type[Any]]:
        """Return built-in payload plugin classes."""
        from armory.plugins.payloads.port_knock import PortKnock
        from armory.plugins.payloads.shells import BindShell, ReverseShell

        return [BindShell, ReverseShell, PortKnock]


# Singleton instance for registration
builtin_payloads = ArmoryBuiltinPayloads()
