"""Result types for the plugin request pipeline.

These types define the contracts between the pipeline stages and their
callers (web routes, CLI). Failures that a caller must render are values,
not exceptions, so every problem in a form can be reported in one pass.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from armory.contracts.enums import (
    FieldErrorKind,
    InvocationStage,
    PipelineState,
)


@dataclass(frozen=True)
class FieldError:
    """A form field that failed shape-level validation."""

    field: str
    kind: FieldErrorKind
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "kind": self.kind.value,
            "message": self.message,
            "value": self.value,
        }


class ValidatedParams(Mapping[str, Any]):
    """Read-only mapping of param name to converted value.

    Only produced by the form validator. Holds no None values and no keys
    outside the plugin's declared params.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(
            {k: v for k, v in values.items() if v is not None}
        )

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ValidatedParams({dict(self._values)!r})"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating raw form input against a param schema."""

    params: ValidatedParams | None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return self.params is not None

    @classmethod
    def success(cls, params: ValidatedParams) -> "ValidationResult":
        return cls(params=params)

    @classmethod
    def failure(cls, errors: list[FieldError]) -> "ValidationResult":
        if not errors:
            raise ValueError("failure result requires at least one error")
        return cls(params=None, errors=tuple(errors))


@dataclass(frozen=True)
class Encode:
    """Invoke an encoder over ``data``."""

    data: bytes


@dataclass(frozen=True)
class Build:
    """Invoke a payload or exploit build."""


InvocationMode = Encode | Build


@dataclass(frozen=True)
class InvocationFailure:
    """A failure raised by the plugin during validate/build/encode."""

    stage: InvocationStage
    message: str
    error_type: str = "Exception"

    def __str__(self) -> str:
        return f"{self.stage.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage.value,
            "message": self.message,
            "error_type": self.error_type,
        }


@dataclass(frozen=True)
class InvocationResult:
    """Artifact produced by a plugin, or the failure that prevented it."""

    status: Literal["success", "failure"]
    artifact: bytes | str | None = None
    failure: InvocationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, artifact: bytes | str) -> "InvocationResult":
        return cls(status="success", artifact=artifact)

    @classmethod
    def error(
        cls,
        stage: InvocationStage,
        message: str,
        *,
        error_type: str = "Exception",
    ) -> "InvocationResult":
        return cls(
            status="failure",
            failure=InvocationFailure(stage=stage, message=message, error_type=error_type),
        )


@dataclass
class PipelineOutcome:
    """Terminal state of one plugin request plus the data for that state.

    Exactly one of errors / bind_error / failure / artifact is meaningful,
    selected by ``state``.
    """

    state: PipelineState
    plugin: Any = None
    errors: tuple[FieldError, ...] = ()
    bind_error: Any = None  # armory.contracts.errors.BindError
    failure: InvocationFailure | None = None
    artifact: bytes | str | None = None
    history: list[PipelineState] = field(default_factory=list, repr=False)

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.INVOKED

    def artifact_text(self) -> str | None:
        """Artifact as display text (bytes decoded with escapes)."""
        if self.artifact is None:
            return None
        if isinstance(self.artifact, bytes):
            return self.artifact.decode("utf-8", errors="backslashreplace")
        return self.artifact
