"""Shape-level validation of submitted plugin params.

A pydantic model is generated from the ParamSpec sequence and validated
against the raw form mapping. Pydantic collects every field error in one
pass; each is mapped onto a FieldError of kind MISSING_REQUIRED,
INVALID_FORMAT or CONSTRAINT_VIOLATION.

Semantic checks that only a plugin instance can make happen later, in the
binder.
"""

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, create_model
from pydantic_core import PydanticCustomError

from armory.contracts import (
    FieldError,
    FieldErrorKind,
    ParamKind,
    ValidatedParams,
    ValidationResult,
)
from armory.plugins.schema import ParamSpec

RawFormInput = Mapping[str, str | list[str]]

# Same separators the job param lists use: "a, b", "a,b" or "a b"
LIST_SEPARATOR = re.compile(r",\s*|\s+")
_INTEGER = re.compile(r"[+-]?\d+")

TRUE_TOKENS: frozenset[str] = frozenset({"true", "yes", "on", "1", "y", "t"})
FALSE_TOKENS: frozenset[str] = frozenset({"false", "no", "off", "0", "n", "f"})

INVALID_FORMAT = FieldErrorKind.INVALID_FORMAT.value
CONSTRAINT_VIOLATION = FieldErrorKind.CONSTRAINT_VIOLATION.value


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | tuple):
        return all(_is_blank(v) for v in value)
    return False


def split_list(value: str | Sequence[str]) -> list[str]:
    """Split one or more submitted strings into non-blank list items."""
    chunks = [value] if isinstance(value, str) else list(value)
    items: list[str] = []
    for chunk in chunks:
        items.extend(item for item in LIST_SEPARATOR.split(chunk.strip()) if item)
    return items


def _convert(spec: ParamSpec, kind: ParamKind, text: str) -> Any:
    """Convert one stripped string to ``kind`` and check constraints."""
    constraints = spec.constraints

    if kind is ParamKind.INTEGER:
        if _INTEGER.fullmatch(text) is None:
            raise PydanticCustomError(INVALID_FORMAT, "expected an integer")
        number = int(text)
        if constraints.minimum is not None and number < constraints.minimum:
            raise PydanticCustomError(
                CONSTRAINT_VIOLATION, "must be >= {minimum}", {"minimum": constraints.minimum}
            )
        if constraints.maximum is not None and number > constraints.maximum:
            raise PydanticCustomError(
                CONSTRAINT_VIOLATION, "must be <= {maximum}", {"maximum": constraints.maximum}
            )
        return number

    if kind is ParamKind.BOOLEAN:
        token = text.lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
        raise PydanticCustomError(INVALID_FORMAT, "expected a boolean (true/false, yes/no, on/off, 1/0)")

    # STRING and ENUM
    if constraints.choices is not None and text not in constraints.choices:
        raise PydanticCustomError(
            CONSTRAINT_VIOLATION,
            "must be one of: {choices}",
            {"choices": ", ".join(constraints.choices)},
        )
    if constraints.pattern is not None and re.fullmatch(constraints.pattern, text) is None:
        raise PydanticCustomError(
            CONSTRAINT_VIOLATION, "must match pattern {pattern}", {"pattern": constraints.pattern}
        )
    return text


def _field_converter(spec: ParamSpec) -> Callable[[Any], Any]:
    """Build the pydantic before-validator for one spec."""

    def convert(value: Any) -> Any:
        if spec.kind is ParamKind.LIST:
            assert spec.item_kind is not None  # derive() guarantees it
            return [_convert(spec, spec.item_kind, item) for item in split_list(value)]

        if isinstance(value, list | tuple):
            if len(value) != 1:
                raise PydanticCustomError(INVALID_FORMAT, "expected a single value")
            value = value[0]
        if not isinstance(value, str):
            raise PydanticCustomError(INVALID_FORMAT, "expected a string value")
        return _convert(spec, spec.kind, value.strip())

    return convert


def build_form_model(specs: Sequence[ParamSpec]) -> type[BaseModel]:
    """Generate the pydantic model validating a form for ``specs``.

    Fields get positional attribute names with the param name as alias, so
    param names never collide with BaseModel attributes.
    """
    fields: dict[str, Any] = {}
    for index, spec in enumerate(specs):
        annotation = Annotated[Any, BeforeValidator(_field_converter(spec))]
        if spec.required and not spec.has_default:
            fields[f"p{index}"] = (annotation, Field(alias=spec.name))
        else:
            fields[f"p{index}"] = (annotation, Field(default=None, alias=spec.name))

    return create_model(  # type: ignore[call-overload,no-any-return]
        "PluginParamsForm",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


# Built-in pydantic error types that mean "well-formed but out of bounds"
_CONSTRAINT_ERROR_TYPES = frozenset(
    {
        CONSTRAINT_VIOLATION,
        "greater_than",
        "greater_than_equal",
        "less_than",
        "less_than_equal",
        "literal_error",
        "enum",
        "string_pattern_mismatch",
        "string_too_short",
        "string_too_long",
        "too_short",
        "too_long",
    }
)


def _error_kind(error_type: str) -> FieldErrorKind:
    if error_type == "missing":
        return FieldErrorKind.MISSING_REQUIRED
    if error_type in _CONSTRAINT_ERROR_TYPES:
        return FieldErrorKind.CONSTRAINT_VIOLATION
    return FieldErrorKind.INVALID_FORMAT

def to_field_errors(error: ValidationError, submitted: Mapping[str, Any]) -> list[FieldError]:
    """Map a pydantic ValidationError onto FieldErrors, in pydantic's order."""
    errors: list[FieldError] = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"])
        kind = _error_kind(item["type"])
        message = "is required" if kind is FieldErrorKind.MISSING_REQUIRED else item["msg"]
        errors.append(
            FieldError(
                field=field,
                kind=kind,
                message=message,
                value=submitted.get(str(item["loc"][0])) if item["loc"] else None,
            )
        )
    return errors


def drop_blank(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Submitted fields minus the blank ones (a blank field counts as absent)."""
    return {name: value for name, value in raw.items() if not _is_blank(value)}


def validate_form(raw: RawFormInput, specs: Sequence[ParamSpec]) -> ValidationResult:
    """Validate raw form input against a plugin's param specs.

    Every field is checked; on failure all FieldErrors are returned in
    declaration order. Blank submissions count as absent. Unknown fields
    are dropped.

    Args:
        raw: Submitted fields (param name -> string or list of strings)
        specs: Param specs from armory.plugins.schema.derive()

    Returns:
        ValidationResult with ValidatedParams holding only submitted,
        converted fields, or the collected errors.
    """
    names = {spec.name for spec in specs}
    submitted = drop_blank({name: value for name, value in raw.items() if name in names})

    model = build_form_model(specs)
    try:
        instance = model.model_validate(submitted)
    except ValidationError as e:
        return ValidationResult.failure(to_field_errors(e, submitted))

    values = instance.model_dump(by_alias=True, exclude_unset=True)
    return ValidationResult.success(ValidatedParams(values))
