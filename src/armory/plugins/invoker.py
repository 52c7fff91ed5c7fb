"""Running a bound plugin instance.

Plugins are third-party code. Whatever they raise during validate, build or
encode is converted into an InvocationResult failure tagged with the stage,
so callers always receive a value they can render.
"""

from typing import Any

import structlog

from armory.contracts import (
    Build,
    Encode,
    InvocationMode,
    InvocationResult,
    InvocationStage,
)
from armory.plugins.protocols import Buildable, Encodable

logger = structlog.get_logger()


def _failure(instance: Any, stage: InvocationStage, error: Exception) -> InvocationResult:
    logger.warning(
        "Plugin invocation failed",
        plugin=getattr(instance, "id", type(instance).__name__),
        stage=stage.value,
        error_type=type(error).__name__,
        error=str(error),
    )
    return InvocationResult.error(stage, str(error), error_type=type(error).__name__)


def invoke(instance: Any, mode: InvocationMode) -> InvocationResult:
    """Validate then build or encode ``instance``.

    Args:
        instance: Bound plugin (Buildable for Build, Encodable for Encode)
        mode: Encode(data) or Build()

    Returns:
        InvocationResult with the artifact (bytes for encode, text for
        build), or the failure and the stage it was raised in.
    """
    try:
        instance.validate()
    except Exception as e:  # plugin trust boundary
        return _failure(instance, InvocationStage.VALIDATE, e)

    if isinstance(mode, Encode):
        if not isinstance(instance, Encodable):
            raise TypeError(f"{type(instance).__name__} cannot encode")
        try:
            encoded = instance.encode(mode.data)
        except Exception as e:  # plugin trust boundary
            return _failure(instance, InvocationStage.ENCODE, e)
        if not isinstance(encoded, bytes | bytearray):
            return _failure(
                instance,
                InvocationStage.ENCODE,
                TypeError(f"encode() returned {type(encoded).__name__}, expected bytes"),
            )
        return InvocationResult.success(bytes(encoded))

    if isinstance(mode, Build):
        if not isinstance(instance, Buildable):
            raise TypeError(f"{type(instance).__name__} cannot build")
        try:
            built = instance.build()
        except Exception as e:  # plugin trust boundary
            return _failure(instance, InvocationStage.BUILD, e)
        return InvocationResult.success(built if isinstance(built, str) else str(built))

    raise TypeError(f"unknown invocation mode: {mode!r}")
