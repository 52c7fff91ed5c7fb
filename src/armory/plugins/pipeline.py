"""Per-request plugin pipeline: resolve, derive, validate, bind, invoke.

Each stage can fail on its own. Failures the user can act on (form errors,
bind errors, plugin failures) end the pipeline in a terminal PipelineState
returned as a value. Failures that are not about the submitted input
propagate as exceptions:

- ClassNotFound / InvalidIdentifier: nothing to run (404)
- PluginLoadError, UnsupportedParamKind: plugin defect (500)
"""

import structlog

from armory.contracts import (
    BindError,
    Build,
    Encode,
    InvocationMode,
    PipelineOutcome,
    PipelineState,
    PluginKind,
    PluginLoadError,
    UnsupportedParamKind,
)
from armory.plugins.base import BasePlugin
from armory.plugins.binder import bind
from armory.plugins.invoker import invoke
from armory.plugins.registry import ClassRegistry
from armory.plugins.schema import ParamSpec, derive
from armory.plugins.validation import RawFormInput, validate_form

logger = structlog.get_logger()


class PluginPipeline:
    """Runs the plugin request state machine against a registry.

    Holds no per-request state; one pipeline object serves every request.

    Args:
        registry: Registry used to resolve identifiers
        reload_plugins: Drop lazily loaded classes before every request
            (picks up edited repository files during plugin development)
    """

    def __init__(self, registry: ClassRegistry, *, reload_plugins: bool = False) -> None:
        self.registry = registry
        self.reload_plugins = reload_plugins

    def describe(
        self,
        identifier: str,
        kind: PluginKind,
    ) -> tuple[type[BasePlugin], tuple[ParamSpec, ...]]:
        """Resolve a plugin and derive its param specs (form rendering)."""
        plugin_cls = self.resolve(identifier, kind)
        return plugin_cls, self._derive(plugin_cls)

    def encode(self, identifier: str, raw: RawFormInput, data: bytes) -> PipelineOutcome:
        """Run an encoder over ``data`` with params from ``raw``."""
        return self.run(PluginKind.ENCODER, identifier, raw, Encode(data))

    def build(
        self,
        identifier: str,
        raw: RawFormInput,
        kind: PluginKind = PluginKind.PAYLOAD,
    ) -> PipelineOutcome:
        """Build a payload (or exploit) with params from ``raw``."""
        return self.run(kind, identifier, raw, Build())

    def run(
        self,
        kind: PluginKind,
        identifier: str,
        raw: RawFormInput,
        mode: InvocationMode,
    ) -> PipelineOutcome:
        """Drive one request through every stage.

        Raises:
            ClassNotFound: If the identifier does not resolve
            PluginLoadError: If the plugin cannot be loaded or constructed
            UnsupportedParamKind: If the plugin declares unsupported params
            ValueError: If ``mode`` does not fit ``kind``
        """
        if isinstance(mode, Encode) != (kind is PluginKind.ENCODER):
            raise ValueError(f"{type(mode).__name__} is not valid for {kind.value}")

        history: list[PipelineState] = []
        log = logger.bind(kind=kind.singular, id=identifier)

        plugin_cls = self.resolve(identifier, kind)
        history.append(PipelineState.RESOLVED)

        specs = self._derive(plugin_cls)
        history.append(PipelineState.SCHEMA_DERIVED)

        try:
            instance = plugin_cls()
        except Exception as e:  # plugin trust boundary
            log.error("Plugin construction failed", error=str(e))
            raise PluginLoadError(identifier, plugin_cls.__module__, f"cannot construct: {e}") from e

        validation = validate_form(raw, specs)
        if validation.params is None:
            history.append(PipelineState.VALIDATION_FAILED)
            log.info("Plugin params rejected", errors=len(validation.errors))
            return PipelineOutcome(
                state=PipelineState.VALIDATION_FAILED,
                plugin=instance,
                errors=validation.errors,
                history=history,
            )
        history.append(PipelineState.VALIDATED)

        try:
            bind(instance, validation.params)
        except BindError as e:
            history.append(PipelineState.BIND_FAILED)
            log.info("Plugin refused param", field=e.field, reason=e.reason)
            return PipelineOutcome(
                state=PipelineState.BIND_FAILED,
                plugin=instance,
                bind_error=e,
                history=history,
            )
        history.append(PipelineState.BOUND)

        result = invoke(instance, mode)
        if not result.ok:
            history.append(PipelineState.INVOCATION_FAILED)
            return PipelineOutcome(
                state=PipelineState.INVOCATION_FAILED,
                plugin=instance,
                failure=result.failure,
                history=history,
            )

        history.append(PipelineState.INVOKED)
        log.debug("Plugin invoked")
        return PipelineOutcome(
            state=PipelineState.INVOKED,
            plugin=instance,
            artifact=result.artifact,
            history=history,
        )

    def resolve(self, identifier: str, kind: PluginKind) -> type[BasePlugin]:
        """Resolve a plugin class, honouring ``reload_plugins``."""
        if self.reload_plugins:
            self.registry.clear_loaded()
        return self.registry.resolve(identifier, kind)

    def _derive(self, plugin_cls: type[BasePlugin]) -> tuple[ParamSpec, ...]:
        try:
            return derive(plugin_cls)
        except UnsupportedParamKind as e:
            # Developer-facing: the plugin declaration is wrong, not the input
            logger.error(
                "Plugin declares unsupported param",
                plugin=e.plugin,
                param=e.param,
                declared_kind=str(e.kind),
            )
            raise
