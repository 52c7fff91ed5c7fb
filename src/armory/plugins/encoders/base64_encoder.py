"""Base64 encoder plugin."""

import base64
import binascii

from armory.plugins.base import BaseEncoder
from armory.plugins.params import Param


class Base64Encoder(BaseEncoder):
    """Encode data as Base64.

    Params:
        alphabet: "standard" (+/) or "urlsafe" (-_)
        padding: Keep trailing "=" padding (default: true)
    """

    id = "base64"
    params = {
        "alphabet": Param(
            "enum",
            default="standard",
            choices=("standard", "urlsafe"),
            desc="Base64 alphabet",
        ),
        "padding": Param("boolean", default=True, desc="Keep trailing '=' padding"),
    }

    def encode(self, data: bytes) -> bytes:
        if self.params["alphabet"] == "urlsafe":
            encoded = base64.urlsafe_b64encode(data)
        else:
            encoded = base64.b64encode(data)

        if not self.params["padding"]:
            encoded = encoded.rstrip(b"=")
        return encoded

    def decode(self, data: bytes) -> bytes:
        # Restore padding stripped by encode()
        padded = data + b"=" * (-len(data) % 4)
        try:
            if self.params["alphabet"] == "urlsafe":
                return base64.urlsafe_b64decode(padded)
            return base64.b64decode(padded, validate=True)
        except binascii.Error as e:
            raise ValueError(f"invalid base64 data: {e}") from e
