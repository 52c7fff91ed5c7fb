"""Binding validated params onto a plugin instance.

Binding is the authoritative, semantic check: each value goes through the
instance's own set_param(), which may reject values the form schema cannot
express (context-dependent or cross-field rules). Binding fails fast on the
first rejected field.
"""

from armory.contracts import BindError, ParamError, ValidatedParams
from armory.plugins.base import BasePlugin


def bind(instance: BasePlugin, params: ValidatedParams) -> None:
    """Assign every validated param onto ``instance``.

    Raises:
        BindError: On the first param the instance rejects; the reason is
            the plugin's own message.
    """
    for name, value in params.items():
        try:
            instance.set_param(name, value)
        except ParamError as e:
            raise BindError(name, e.message) from e
