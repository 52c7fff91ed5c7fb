"""URL (percent) encoder plugin."""

from urllib.parse import quote_from_bytes, unquote_to_bytes

from armory.contracts import ParamError
from armory.plugins.base import BaseEncoder
from armory.plugins.params import Param


class URLEncoder(BaseEncoder):
    """Percent-encode data for use in a URL.

    Unreserved characters are kept unless ``all`` is set, in which case
    every byte is escaped.
    """

    id = "url"
    params = {
        "safe": Param("string", default="", desc="Extra characters to leave unescaped"),
        "all": Param("boolean", default=False, desc="Escape every byte, even unreserved ones"),
    }

    def check_param(self, name: str, value: object) -> None:
        if name == "safe" and isinstance(value, str) and "%" in value:
            raise ParamError(name, "'%' cannot be left unescaped")

    def encode(self, data: bytes) -> bytes:
        if self.params["all"]:
            return "".join(f"%{byte:02X}" for byte in data).encode("ascii")
        return quote_from_bytes(data, safe=self.params["safe"]).encode("ascii")

    def decode(self, data: bytes) -> bytes:
        return unquote_to_bytes(data)
