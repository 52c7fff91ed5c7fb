"""Port knocking payload."""

from typing import Any

from armory.contracts import ParamError, PluginValidationError
from armory.plugins.base import BasePayload
from armory.plugins.params import Param
from armory.plugins.payloads.shells import SAFE_HOST


class PortKnock(BasePayload):
    """Shell script knocking a sequence of ports.

    Each knock is a single netcat probe; ``delay`` seconds separate knocks.
    """

    id = "cmd/port_knock"
    params = {
        "host": Param("string", required=True, desc="Host to knock on"),
        "ports": Param(
            "list",
            item_kind="integer",
            required=True,
            minimum=1,
            maximum=65535,
            desc="Knock sequence (comma or space separated)",
        ),
        "protocol": Param("enum", default="tcp", choices=("tcp", "udp"), desc="Knock protocol"),
        "delay": Param("integer", default=1, minimum=0, maximum=60, desc="Seconds between knocks"),
    }

    def check_param(self, name: str, value: Any) -> None:
        if name == "host" and SAFE_HOST.fullmatch(value) is None:
            raise ParamError(name, "host contains characters that are unsafe in a shell command")

    def validate(self) -> None:
        super().validate()
        if len(self.params["ports"]) < 2:
            raise PluginValidationError("a knock sequence needs at least two ports")

    def build(self) -> str:
        flags = "-zu" if self.params["protocol"] == "udp" else "-z"
        lines = []
        for port in self.params["ports"]:
            lines.append(f"nc {flags} -w 1 {self.params['host']} {port}")
            if self.params["delay"]:
                lines.append(f"sleep {self.params['delay']}")
        return "\n".join(lines)
