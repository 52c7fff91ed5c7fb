"""All status codes, modes, and kinds used across subsystem boundaries."""

from enum import Enum


class PluginKind(str, Enum):
    """Namespace a plugin class is registered under.

    Uses (str, Enum) because the value is also the directory name inside a
    plugin repository (``<repo>/payloads/...``).
    """

    PAYLOAD = "payloads"
    ENCODER = "encoders"
    EXPLOIT = "exploits"

    @property
    def singular(self) -> str:
        """Human-readable singular name ("payload", "encoder", ...)."""
        return self.value[:-1]


class ParamKind(str, Enum):
    """Parameter kinds that can be validated from HTML form input."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    LIST = "list"


# Kinds allowed as list items
SCALAR_KINDS: frozenset[ParamKind] = frozenset(
    {ParamKind.STRING, ParamKind.INTEGER, ParamKind.BOOLEAN, ParamKind.ENUM}
)


class FieldErrorKind(str, Enum):
    """Why a single form field was rejected."""

    MISSING_REQUIRED = "missing_required"
    INVALID_FORMAT = "invalid_format"
    CONSTRAINT_VIOLATION = "constraint_violation"


class InvocationStage(str, Enum):
    """Plugin lifecycle stage an invocation failure was raised in."""

    VALIDATE = "validate"
    BUILD = "build"
    ENCODE = "encode"


class PipelineState(str, Enum):
    """States of a single plugin request.

    Terminal states are INVOKED and the four *_FAILED states. No state is
    revisited.
    """

    RESOLVED = "resolved"
    SCHEMA_DERIVED = "schema_derived"
    VALIDATION_FAILED = "validation_failed"
    VALIDATED = "validated"
    BIND_FAILED = "bind_failed"
    BOUND = "bound"
    INVOCATION_FAILED = "invocation_failed"
    INVOKED = "invoked"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        PipelineState.VALIDATION_FAILED,
        PipelineState.BIND_FAILED,
        PipelineState.INVOCATION_FAILED,
        PipelineState.INVOKED,
    }
)


class JobStatus(str, Enum):
    """Status of an enqueued background job.

    Uses (str, Enum) for database serialization to jobs.status.
    """

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
