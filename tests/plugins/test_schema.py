"""Tests for ParamSpec derivation."""

import pytest


def _plugin(params: dict) -> type:
    from armory.plugins import BasePayload

    class Subject(BasePayload):
        id = "test/subject"

        def build(self) -> str:
            return ""

    Subject.params = params
    Subject.declared_params = dict(params)
    return Subject


class TestDerive:
    """derive() over plugin declarations."""

    def test_declaration_order_and_fields(self) -> None:
        from armory.contracts import ParamKind
        from armory.plugins import Param, derive

        cls = _plugin(
            {
                "port": Param("integer", required=True, minimum=1, maximum=65535, desc="Port"),
                "shell": Param("enum", default="sh", choices=("sh", "bash")),
                "ports": Param("list", item_kind="integer"),
            }
        )

        specs = derive(cls)

        assert [s.name for s in specs] == ["port", "shell", "ports"]
        port, shell, ports = specs
        assert port.kind is ParamKind.INTEGER
        assert port.required
        assert port.constraints.maximum == 65535
        assert port.description == "Port"
        assert shell.has_default
        assert shell.constraints.choices == ("sh", "bash")
        assert ports.item_kind is ParamKind.INTEGER

    def test_idempotent(self) -> None:
        from armory.plugins import derive
        from armory.plugins.payloads.port_knock import PortKnock

        assert derive(PortKnock) == derive(PortKnock)

    def test_unknown_kind(self) -> None:
        from armory.contracts import UnsupportedParamKind
        from armory.plugins import Param, derive

        cls = _plugin({"blob": Param("binary")})

        with pytest.raises(UnsupportedParamKind) as exc_info:
            derive(cls)

        assert exc_info.value.param == "blob"
        assert exc_info.value.plugin == "test/subject"

    def test_nested_list(self) -> None:
        from armory.contracts import UnsupportedParamKind
        from armory.plugins import Param, derive

        cls = _plugin({"matrix": Param("list", item_kind="list")})

        with pytest.raises(UnsupportedParamKind, match="list items must be scalar"):
            derive(cls)

    def test_enum_without_choices(self) -> None:
        from armory.contracts import UnsupportedParamKind
        from armory.plugins import Param, derive

        cls = _plugin({"mode": Param("enum")})

        with pytest.raises(UnsupportedParamKind, match="no choices"):
            derive(cls)

    def test_invalid_pattern(self) -> None:
        from armory.contracts import UnsupportedParamKind
        from armory.plugins import Param, derive

        cls = _plugin({"name": Param("string", pattern="[unclosed")})

        with pytest.raises(UnsupportedParamKind, match="invalid pattern") as exc_info:
            derive(cls)

        assert exc_info.value.param == "name"

    def test_declaration_not_a_param(self) -> None:
        from armory.contracts import UnsupportedParamKind
        from armory.plugins import derive

        cls = _plugin({"port": {"kind": "integer"}})

        with pytest.raises(UnsupportedParamKind, match="not a Param") as exc_info:
            derive(cls)

        assert exc_info.value.kind == "dict"

    def test_to_dict(self) -> None:
        from armory.plugins import derive
        from armory.plugins.encoders import XOREncoder

        (key,) = derive(XOREncoder)

        assert key.to_dict() == {
            "name": "key",
            "kind": "list",
            "item_kind": "integer",
            "required": False,
            "default": [0x41],
            "description": "Key bytes (decimal, comma or space separated)",
            "constraints": {"choices": None, "minimum": 0, "maximum": 255, "pattern": None},
        }
