"""XOR encoder plugin."""

from itertools import cycle
from typing import Any

from armory.contracts import ParamError
from armory.plugins.base import BaseEncoder
from armory.plugins.params import Param


class XOREncoder(BaseEncoder):
    """XOR data with a repeating key.

    The key is a list of decimal byte values such as ``65, 66``.
    """

    id = "xor"
    params = {
        "key": Param(
            "list",
            item_kind="integer",
            default=[0x41],
            minimum=0,
            maximum=255,
            desc="Key bytes (decimal, comma or space separated)",
        ),
    }

    def check_param(self, name: str, value: Any) -> None:
        if name == "key" and not value:
            raise ParamError(name, "key must contain at least one byte")

    def encode(self, data: bytes) -> bytes:
        return bytes(b ^ k for b, k in zip(data, cycle(self.params["key"])))

    def decode(self, data: bytes) -> bytes:
        # XOR is its own inverse
        return self.encode(data)
