"""Payload, encoder and exploit routes.

Static paths are declared before ``{identifier:path}`` routes so that
``/payloads/encoders`` and ``/exploits/build/...`` are not captured as
identifiers.
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from armory.contracts import InvocationStage, PipelineOutcome, PipelineState, PluginKind
from armory.plugins import BaseEncoder, BaseExploit, BasePlugin, ClassRegistry, PluginPipeline
from armory.web.forms import plugin_params, read_form, single

router = APIRouter()


def _registry(request: Request) -> ClassRegistry:
    return request.app.state.registry


def _pipeline(request: Request) -> PluginPipeline:
    return request.app.state.pipeline


def _info(plugin_cls: type[BasePlugin]) -> dict[str, Any]:
    info: dict[str, Any] = {
        "id": plugin_cls.id,
        "kind": plugin_cls.kind.singular,
        "summary": plugin_cls.summary(),
        "description": plugin_cls.description(),
    }
    if issubclass(plugin_cls, BaseEncoder):
        info["reversible"] = plugin_cls.reversible()
    if issubclass(plugin_cls, BaseExploit):
        info["advisories"] = list(plugin_cls.advisories)
    return info


def _listing(request: Request, kind: PluginKind) -> dict[str, Any]:
    return {"kind": kind.value, "ids": _registry(request).list_ids(kind)}


def _show(request: Request, identifier: str, kind: PluginKind) -> dict[str, Any]:
    return _info(_pipeline(request).resolve(identifier, kind))


def _form(request: Request, identifier: str, kind: PluginKind) -> dict[str, Any]:
    plugin_cls, specs = _pipeline(request).describe(identifier, kind)
    return {**_info(plugin_cls), "params": [spec.to_dict() for spec in specs]}


def _outcome_status(outcome: PipelineOutcome) -> int:
    if outcome.state is PipelineState.INVOKED:
        return 200
    if outcome.state is PipelineState.INVOCATION_FAILED:
        assert outcome.failure is not None
        return 400 if outcome.failure.stage is InvocationStage.VALIDATE else 500
    # VALIDATION_FAILED, BIND_FAILED
    return 400


def _outcome_response(identifier: str, outcome: PipelineOutcome) -> JSONResponse:
    body: dict[str, Any] = {
        "id": identifier,
        "state": outcome.state.value,
        "history": [state.value for state in outcome.history],
    }
    if outcome.state is PipelineState.INVOKED:
        body["result"] = outcome.artifact_text()
    elif outcome.state is PipelineState.VALIDATION_FAILED:
        body["errors"] = [error.to_dict() for error in outcome.errors]
    elif outcome.state is PipelineState.BIND_FAILED:
        body["errors"] = [
            {"field": outcome.bind_error.field, "kind": "bind", "message": outcome.bind_error.reason}
        ]
    elif outcome.failure is not None:
        body["failure"] = outcome.failure.to_dict()
    return JSONResponse(status_code=_outcome_status(outcome), content=body)


# Payloads


@router.get("/payloads")
def list_payloads(request: Request) -> dict[str, Any]:
    return _listing(request, PluginKind.PAYLOAD)


# Encoders (before /payloads/{identifier})


@router.get("/payloads/encoders")
def list_encoders(request: Request) -> dict[str, Any]:
    return _listing(request, PluginKind.ENCODER)


@router.get("/payloads/encoders/encode/{identifier:path}")
def encoder_form(identifier: str, request: Request) -> dict[str, Any]:
    return _form(request, identifier, PluginKind.ENCODER)


@router.post("/payloads/encoders/encode/{identifier:path}")
async def encode(identifier: str, request: Request) -> JSONResponse:
    fields = await read_form(request)
    data = single(fields, "data").encode("utf-8")
    outcome = _pipeline(request).encode(identifier, plugin_params(fields), data)
    return _outcome_response(identifier, outcome)


@router.get("/payloads/encoders/{identifier:path}")
def show_encoder(identifier: str, request: Request) -> dict[str, Any]:
    return _show(request, identifier, PluginKind.ENCODER)


@router.get("/payloads/build/{identifier:path}")
def payload_form(identifier: str, request: Request) -> dict[str, Any]:
    return _form(request, identifier, PluginKind.PAYLOAD)


@router.post("/payloads/build/{identifier:path}")
async def build_payload(identifier: str, request: Request) -> JSONResponse:
    fields = await read_form(request)
    outcome = _pipeline(request).build(identifier, plugin_params(fields), PluginKind.PAYLOAD)
    return _outcome_response(identifier, outcome)


@router.get("/payloads/{identifier:path}")
def show_payload(identifier: str, request: Request) -> dict[str, Any]:
    return _show(request, identifier, PluginKind.PAYLOAD)


# Exploits


@router.get("/exploits")
def list_exploits(request: Request) -> dict[str, Any]:
    return _listing(request, PluginKind.EXPLOIT)


@router.get("/exploits/build/{identifier:path}")
def exploit_form(identifier: str, request: Request) -> dict[str, Any]:
    return _form(request, identifier, PluginKind.EXPLOIT)


@router.post("/exploits/build/{identifier:path}")
async def build_exploit(identifier: str, request: Request) -> JSONResponse:
    fields = await read_form(request)
    outcome = _pipeline(request).build(identifier, plugin_params(fields), PluginKind.EXPLOIT)
    return _outcome_response(identifier, outcome)


@router.get("/exploits/{identifier:path}")
def show_exploit(identifier: str, request: Request) -> dict[str, Any]:
    return _show(request, identifier, PluginKind.EXPLOIT)
