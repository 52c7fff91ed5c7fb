"""Hook implementation for built-in encoder plugins."""

from typing import Any

from armory.plugins.hookspecs import hookimpl


class ArmoryBuiltinEncoders:
    """Hook implementer for built-in encoder plugins."""

    @hookimpl
    def armory_get_encoders(self) -> list[type[Any]]:
        """Return built-in encoder plugin classes."""
        from armory.plugins.encoders.base64_encoder import Base64Encoder
        from armory.plugins.encoders.hex_encoder import HexEncoder
        from armory.plugins.encoders.url_encoder import URLEncoder
        from armory.plugins.encoders.xor_encoder import XOREncoder

        return [Base64Encoder, HexEncoder, URLEncoder, XOREncoder]


# Singleton instance for registration
builtin_encoders = ArmoryBuiltinEncoders()
