"""Exception taxonomy shared by the registry, pipeline, web and CLI layers.

Each failure kind is its own type so callers can pick a status code and a
message independently. Field-level validation problems are NOT exceptions;
they are collected into FieldError records (see contracts.results).
"""

from collections.abc import Sequence
from typing import Any


class ArmoryError(Exception):
    """Base class for all Armory errors."""


class ClassNotFound(ArmoryError):
    """No plugin class is registered under the identifier."""

    def __init__(self, identifier: str, kind: str) -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(f"{kind} not found: {identifier!r}")


class InvalidIdentifier(ClassNotFound):
    """Identifier does not match the plugin identifier grammar.

    Subclasses ClassNotFound: a malformed identifier can never resolve, and
    callers treat both the same way.
    """

    def __init__(self, identifier: str, kind: str = "plugin") -> None:
        super().__init__(identifier, kind)
        self.args = (f"invalid {kind} identifier: {identifier!r}",)


class PluginLoadError(ArmoryError):
    """A plugin file exists but could not be loaded into a class."""

    def __init__(self, identifier: str, path: str, reason: str) -> None:
        self.identifier = identifier
        self.path = path
        self.reason = reason
        super().__init__(f"failed to load {identifier!r} from {path}: {reason}")


class UnsupportedParamKind(ArmoryError):
    """A plugin declares a parameter shape forms cannot validate.

    This is a plugin defect, not a user input problem.
    """

    def __init__(self, plugin: str, param: str, kind: Any, reason: str | None = None) -> None:
        self.plugin = plugin
        self.param = param
        self.kind = kind
        detail = reason or f"unsupported param kind {kind!r}"
        super().__init__(f"{plugin}: param {param!r}: {detail}")


class ParamError(ArmoryError):
    """Raised by a plugin instance when it rejects a parameter value."""

    def __init__(self, param: str, message: str) -> None:
        self.param = param
        self.message = message
        super().__init__(f"{param}: {message}")


class BindError(ArmoryError):
    """First parameter the plugin instance refused while binding."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"failed to set param {field!r}: {reason}")


class PluginValidationError(ArmoryError):
    """Raised by a plugin's validate() when its bound params are incoherent."""


class RepositoryNotFound(ArmoryError):
    """No installed plugin repository with the given name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"repository not found: {name!r}")


class JobNotFound(ArmoryError):
    """No job recorded under the given id."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"job not found: {job_id!r}")


class JobParamsError(ArmoryError):
    """A job form submission failed validation.

    Carries every FieldError so all of them can be shown together.
    """

    def __init__(self, job: str, errors: Sequence[Any]) -> None:
        self.job = job
        self.errors = tuple(errors)
        super().__init__(f"invalid {job} params: " + "; ".join(str(e) for e in self.errors))
