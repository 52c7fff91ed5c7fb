"""Built-in payload encoders.

Encoders transform payload bytes (to evade filters or fit a transport).
Each receives bytes and returns bytes; reversible encoders also decode.
"""

from armory.plugins.encoders.base64_encoder import Base64Encoder
from armory.plugins.encoders.hex_encoder import HexEncoder
from armory.plugins.encoders.url_encoder import URLEncoder
from armory.plugins.encoders.xor_encoder import XOREncoder

__all__ = ["Base64Encoder", "HexEncoder", "URLEncoder", "XOREncoder"]
