"""Shared contracts for cross-boundary data types.

Import pattern:
    from armory.contracts import PluginKind, FieldError, ClassNotFound
"""

from armory.contracts.enums import (
    SCALAR_KINDS,
    FieldErrorKind,
    InvocationStage,
    JobStatus,
    ParamKind,
    PipelineState,
    PluginKind,
)
from armory.contracts.errors import (
    ArmoryError,
    BindError,
    ClassNotFound,
    InvalidIdentifier,
    JobNotFound,
    JobParamsError,
    ParamError,
    PluginLoadError,
    PluginValidationError,
    RepositoryNotFound,
    UnsupportedParamKind,
)
from armory.contracts.results import (
    Build,
    Encode,
    FieldError,
    InvocationFailure,
    InvocationMode,
    InvocationResult,
    PipelineOutcome,
    ValidatedParams,
    ValidationResult,
)

__all__ = [
    # enums
    "FieldErrorKind",
    "InvocationStage",
    "JobStatus",
    "ParamKind",
    "PipelineState",
    "PluginKind",
    "SCALAR_KINDS",
    # errors
    "ArmoryError",
    "BindError",
    "ClassNotFound",
    "InvalidIdentifier",
    "JobNotFound",
    "JobParamsError",
    "ParamError",
    "PluginLoadError",
    "PluginValidationError",
    "RepositoryNotFound",
    "UnsupportedParamKind",
    # results
    "Build",
    "Encode",
    "FieldError",
    "InvocationFailure",
    "InvocationMode",
    "InvocationResult",
    "PipelineOutcome",
    "ValidatedParams",
    "ValidationResult",
]
