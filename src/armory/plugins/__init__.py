"""Plugin system: payloads, encoders and exploits via pluggy.

This module provides the plugin request pipeline:

- Params: Param declarations on plugin classes
- Base classes: BasePayload, BaseEncoder, BaseExploit
- Registry: identifier -> class resolution (hooks + repository files)
- Schema: ParamSpec derivation from declarations
- Validation: raw form input -> ValidatedParams or FieldErrors
- Binder / Invoker: assign params onto an instance, run it
- Pipeline: the per-request state machine tying the stages together
"""

from armory.plugins.base import BaseEncoder, BaseExploit, BasePayload, BasePlugin
from armory.plugins.binder import bind
from armory.plugins.hookspecs import hookimpl, hookspec
from armory.plugins.identifiers import PluginIdentifier
from armory.plugins.invoker import invoke
from armory.plugins.params import Param
from armory.plugins.pipeline import PluginPipeline
from armory.plugins.protocols import Buildable, Encodable
from armory.plugins.registry import ClassRegistry
from armory.plugins.schema import ParamConstraints, ParamSpec, derive
from armory.plugins.validation import validate_form

__all__ = [  # Grouped by stage
    # Declarations and base classes
    "BaseEncoder",
    "BaseExploit",
    "BasePayload",
    "BasePlugin",
    "Buildable",
    "Encodable",
    "Param",
    # Registry
    "ClassRegistry",
    "PluginIdentifier",
    "hookimpl",
    "hookspec",
    # Schema and validation
    "ParamConstraints",
    "ParamSpec",
    "derive",
    "validate_form",
    # Binding and invocation
    "PluginPipeline",
    "bind",
    "invoke",
]
