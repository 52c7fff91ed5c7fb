"""Parameter declarations for plugin classes.

Plugins declare their parameters as a ``params`` mapping of name to Param:

    class BindShell(BasePayload):
        id = "cmd/bind_shell"
        params = {
            "port": Param("integer", required=True, minimum=1, maximum=65535,
                          desc="TCP port to listen on"),
        }

Declarations are metadata only. Form validation reads them through
armory.plugins.schema; instances enforce them again in set_param().
"""

import re
from dataclasses import dataclass
from typing import Any

from armory.contracts import ParamError


@dataclass(frozen=True)
class Param:
    """Declared shape of one plugin parameter.

    ``kind`` is kept as a plain string: declarations come from third-party
    plugin files and may name kinds the form layer does not support.
    """

    kind: str
    required: bool = False
    default: Any = None
    desc: str = ""
    choices: tuple[str, ...] | None = None
    minimum: int | None = None
    maximum: int | None = None
    pattern: str | None = None
    item_kind: str = "string"

    def __post_init__(self) -> None:
        # Accept lists for convenience, store an immutable tuple
        if self.choices is not None and not isinstance(self.choices, tuple):
            object.__setattr__(self, "choices", tuple(self.choices))

    def check(self, name: str, value: Any) -> None:
        """Check an already-converted value against this declaration.

        Raises:
            ParamError: If the value has the wrong type or breaks a constraint.
        """
        if self.kind == "list":
            if not isinstance(value, list):
                raise ParamError(name, f"expected a list, got {type(value).__name__}")
            for item in value:
                self._check_scalar(name, self.item_kind, item)
            return
        self._check_scalar(name, self.kind, value)

    def _check_scalar(self, name: str, kind: str, value: Any) -> None:
        if kind == "integer":
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                raise ParamError(name, f"expected an integer, got {value!r}")
            if self.minimum is not None and value < self.minimum:
                raise ParamError(name, f"must be >= {self.minimum}")
            if self.maximum is not None and value > self.maximum:
                raise ParamError(name, f"must be <= {self.maximum}")
        elif kind == "boolean":
            if not isinstance(value, bool):
                raise ParamError(name, f"expected a boolean, got {value!r}")
        elif kind in ("string", "enum"):
            if not isinstance(value, str):
                raise ParamError(name, f"expected a string, got {value!r}")
            if self.choices is not None and value not in self.choices:
                raise ParamError(name, f"must be one of: {', '.join(self.choices)}")
            if self.pattern is not None and re.fullmatch(self.pattern, value) is None:
                raise ParamError(name, f"must match {self.pattern!r}")
