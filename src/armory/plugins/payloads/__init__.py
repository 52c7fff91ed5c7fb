"""Built-in payloads.

Payloads build attack strings (shell one-liners, knock sequences) from
their params. Building never executes anything.
"""

from armory.plugins.payloads.port_knock import PortKnock
from armory.plugins.payloads.shells import BindShell, ReverseShell

__all__ = ["BindShell", "PortKnock", "ReverseShell"]
