"""Hex encoder plugin."""

from armory.plugins.base import BaseEncoder
from armory.plugins.params import Param


class HexEncoder(BaseEncoder):
    """Encode every byte as two hex digits.

    An optional prefix is written before each byte, e.g. ``\\x41\\x42`` for
    shell/C string literals or ``%41%42`` for URLs.
    """

    id = "hex"
    params = {
        "case": Param("enum", default="lower", choices=("lower", "upper"), desc="Hex digit case"),
        "prefix": Param(
            "string",
            default="",
            pattern=r"\\x|0x|%",
            desc="Text written before each byte (\\x, 0x or %)",
        ),
    }

    def encode(self, data: bytes) -> bytes:
        digits = data.hex()
        if self.params["case"] == "upper":
            digits = digits.upper()

        prefix = self.params["prefix"]
        if prefix:
            digits = "".join(prefix + digits[i : i + 2] for i in range(0, len(digits), 2))
        return digits.encode("ascii")

    def decode(self, data: bytes) -> bytes:
        text = data.decode("ascii")
        prefix = self.params["prefix"]
        if prefix:
            text = text.replace(prefix, "")
        return bytes.fromhex(text)
