"""Tests for plugin identifier parsing."""

import pytest
from hypothesis import given
from hypothesis import strategies as st


class TestPluginIdentifier:
    """Identifier grammar and path mapping."""

    @pytest.mark.parametrize("raw", ["base64", "cmd/bind_shell", "a/b-c/d_0", "x1"])
    def test_valid(self, raw: str) -> None:
        from armory.plugins.identifiers import PluginIdentifier

        assert str(PluginIdentifier.parse(raw)) == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "../../etc/passwd",
            "cmd/../shell",
            "/cmd/shell",
            "cmd/shell/",
            "cmd//shell",
            "Cmd/Shell",
            "cmd/shell.py",
            "cmd\\shell",
            "cmd shell",
        ],
    )
    def test_invalid(self, raw: str) -> None:
        from armory.contracts import InvalidIdentifier
        from armory.plugins.identifiers import PluginIdentifier

        with pytest.raises(InvalidIdentifier):
            PluginIdentifier.parse(raw)

    def test_too_long(self) -> None:
        from armory.contracts import InvalidIdentifier
        from armory.plugins.identifiers import MAX_IDENTIFIER_LENGTH, PluginIdentifier

        with pytest.raises(InvalidIdentifier):
            PluginIdentifier.parse("a" * (MAX_IDENTIFIER_LENGTH + 1))

    def test_kind_in_error(self) -> None:
        from armory.contracts import InvalidIdentifier
        from armory.plugins.identifiers import PluginIdentifier

        with pytest.raises(InvalidIdentifier) as exc_info:
            PluginIdentifier.parse("..", "encoder")

        assert exc_info.value.kind == "encoder"

    def test_relative_path(self) -> None:
        from pathlib import PurePosixPath

        from armory.plugins.identifiers import PluginIdentifier

        identifier = PluginIdentifier.parse("cmd/bind_shell")

        assert identifier.name == "bind_shell"
        assert identifier.relative_path() == PurePosixPath("cmd/bind_shell.py")

    @given(st.text(max_size=40))
    def test_parsed_paths_stay_relative(self, raw: str) -> None:
        from armory.contracts import InvalidIdentifier
        from armory.plugins.identifiers import PluginIdentifier

        try:
            identifier = PluginIdentifier.parse(raw)
        except InvalidIdentifier:
            return
        path = identifier.relative_path()
        assert not path.is_absolute()
        assert ".." not in path.parts
