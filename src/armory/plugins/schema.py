"""Form-level parameter schema derived from plugin declarations.

derive() turns a plugin class's Param declarations into ParamSpec records
the form validator understands. It fails closed: a declaration the form
layer cannot validate raises UnsupportedParamKind instead of being coerced.
"""

import re
from dataclasses import dataclass
from typing import Any

from armory.contracts import SCALAR_KINDS, ParamKind, UnsupportedParamKind
from armory.plugins.params import Param


@dataclass(frozen=True)
class ParamConstraints:
    """Optional value constraints of a ParamSpec."""

    choices: tuple[str, ...] | None = None
    minimum: int | None = None
    maximum: int | None = None
    pattern: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "choices": list(self.choices) if self.choices is not None else None,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "pattern": self.pattern,
        }


@dataclass(frozen=True)
class ParamSpec:
    """Shape of one plugin parameter, as seen by the form layer."""

    name: str
    kind: ParamKind
    required: bool = False
    default: Any = None
    description: str = ""
    constraints: ParamConstraints = ParamConstraints()
    item_kind: ParamKind | None = None  # Only for LIST

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation for form rendering."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "item_kind": self.item_kind.value if self.item_kind is not None else None,
            "required": self.required,
            "default": self.default,
            "description": self.description,
            "constraints": self.constraints.to_dict(),
        }


def _plugin_label(plugin_cls: type) -> str:
    return getattr(plugin_cls, "id", None) or plugin_cls.__name__


def _parse_kind(plugin_cls: type, name: str, raw_kind: Any) -> ParamKind:
    try:
        return ParamKind(raw_kind)
    except ValueError:
        raise UnsupportedParamKind(_plugin_label(plugin_cls), name, raw_kind) from None


def derive(plugin_cls: type) -> tuple[ParamSpec, ...]:
    """Derive the ordered ParamSpec sequence for a plugin class.

    Reads ``plugin_cls.declared_params`` (see BasePlugin). Pure: no I/O and
    no caching, so repeated calls on the same class return equal tuples.

    Raises:
        UnsupportedParamKind: If a declaration is not a Param, uses an
            unsupported kind, declares an enum without choices, a list with
            a non-scalar item kind or a pattern that is not a valid regex.
    """
    declared = getattr(plugin_cls, "declared_params", {})
    label = _plugin_label(plugin_cls)
    specs: list[ParamSpec] = []

    for name, param in declared.items():
        if not isinstance(param, Param):
            raise UnsupportedParamKind(
                label, name, type(param).__name__, "declaration is not a Param"
            )
        kind = _parse_kind(plugin_cls, name, param.kind)
        item_kind: ParamKind | None = None

        if kind is ParamKind.LIST:
            item_kind = _parse_kind(plugin_cls, name, param.item_kind)
            if item_kind not in SCALAR_KINDS:
                raise UnsupportedParamKind(
                    label, name, param.item_kind,
                    f"list items must be scalar, not {item_kind.value!r}",
                )

        if ParamKind.ENUM in (kind, item_kind) and not param.choices:
            raise UnsupportedParamKind(label, name, param.kind, "enum param declares no choices")

        if param.pattern is not None:
            try:
                re.compile(param.pattern)
            except re.error as e:
                raise UnsupportedParamKind(
                    label, name, param.kind, f"invalid pattern {param.pattern!r}: {e}"
                ) from e

        specs.append(
            ParamSpec(
                name=name,
                kind=kind,
                required=param.required,
                default=param.default,
                description=param.desc,
                constraints=ParamConstraints(
                    choices=param.choices,
                    minimum=param.minimum,
                    maximum=param.maximum,
                    pattern=param.pattern,
                ),
                item_kind=item_kind,
            )
        )

    return tuple(specs)
