"""Base classes for plugin implementations.

These provide param storage and the lifecycle hooks the pipeline calls.
Plugins can subclass these for convenience; the registry only accepts
subclasses of the base matching the kind they are registered under.

Lifecycle (driven by armory.plugins.invoker):
    instance = PluginClass()
    instance.set_params(validated)   # binder, may raise ParamError
    instance.validate()              # may raise anything
    instance.build() / encode(data)  # may raise anything
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from armory.contracts import ParamError, PluginKind, PluginValidationError
from armory.plugins.params import Param


class BasePlugin(ABC):
    """Common param handling for payloads, encoders and exploits.

    Subclasses declare ``id`` and a ``params`` mapping. Declarations are
    merged along the MRO into ``declared_params``: base classes first, a
    redeclared name replaces the inherited entry in place.
    """

    id: ClassVar[str]
    kind: ClassVar[PluginKind]
    params: ClassVar[Mapping[str, Param]] = {}
    declared_params: ClassVar[dict[str, Param]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        merged: dict[str, Param] = {}
        for klass in reversed(cls.__mro__):
            merged.update(klass.__dict__.get("params", {}))
        cls.declared_params = merged

    def __init__(self, **params: Any) -> None:
        # Instance storage shadows the class-level declarations
        self.params: dict[str, Any] = {  # type: ignore[misc]
            name: copy.deepcopy(param.default)
            for name, param in self.declared_params.items()
        }
        if params:
            self.set_params(params)

    @classmethod
    def summary(cls) -> str:
        """First non-empty line of the class docstring."""
        if cls.__doc__:
            for line in cls.__doc__.strip().split("\n"):
                cleaned = line.strip()
                if cleaned:
                    return cleaned
        return f"{getattr(cls, 'id', cls.__name__)} {cls.kind.singular}"

    @classmethod
    def description(cls) -> str:
        """Full class docstring, dedented."""
        import inspect

        return inspect.cleandoc(cls.__doc__ or "")

    def set_param(self, name: str, value: Any) -> None:
        """Assign one param after the declaration and plugin checks pass.

        Raises:
            ParamError: If the param is unknown or the value is rejected.
        """
        try:
            param = self.declared_params[name]
        except KeyError:
            raise ParamError(name, "unknown param") from None

        param.check(name, value)
        self.check_param(name, value)
        self.params[name] = value

    def set_params(self, params: Mapping[str, Any]) -> None:
        """Assign params in order, stopping at the first rejected one."""
        for name, value in params.items():
            self.set_param(name, value)

    def check_param(self, name: str, value: Any) -> None:  # noqa: B027
        """Plugin-specific check for a single value.

        Override to reject values the static declaration cannot express.
        Raise ParamError to reject.
        """

    def validate(self) -> None:
        """Check the bound params form an executable configuration.

        The default checks that every required param has a value. Override
        (and call super) for cross-param checks.

        Raises:
            PluginValidationError: If the configuration is incoherent.
        """
        missing = [
            name
            for name, param in self.declared_params.items()
            if param.required and self.params.get(name) is None
        ]
        if missing:
            raise PluginValidationError(
                f"required params not set: {', '.join(missing)}"
            )


class BasePayload(BasePlugin):
    """Base class for payloads (Buildable).

    Example:
        class Echo(BasePayload):
            id = "cmd/echo"
            params = {"text": Param("string", required=True)}

            def build(self) -> str:
                return f"echo {shlex.quote(self.params['text'])}"
    """

    kind = PluginKind.PAYLOAD

    @abstractmethod
    def build(self) -> str:
        """Build and return the payload text."""
        ...


class BaseEncoder(BasePlugin):
    """Base class for payload encoders (Encodable).

    Subclasses implement encode(); reversible encoders also implement
    decode() so that decode(encode(data)) == data.
    """

    kind = PluginKind.ENCODER

    @abstractmethod
    def encode(self, data: bytes) -> bytes:
        """Encode ``data`` and return the encoded bytes."""
        ...

    def decode(self, data: bytes) -> bytes:
        """Inverse of encode(), when the encoding has one."""
        raise NotImplementedError(f"{self.id} encoder cannot decode")

    @classmethod
    def reversible(cls) -> bool:
        """Whether the encoder overrides decode()."""
        return cls.decode is not BaseEncoder.decode


class BaseExploit(BasePlugin):
    """Base class for exploits (Buildable).

    build() returns the exploit's rendered trigger (request, command line,
    file contents) without sending it anywhere.
    """

    kind = PluginKind.EXPLOIT
    advisories: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def build(self) -> str:
        """Build and return the exploit artifact text."""
        ...
