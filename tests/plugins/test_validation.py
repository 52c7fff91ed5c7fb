"""Tests for form validation against ParamSpecs."""

import pytest
from hypothesis import given
from hypothesis import strategies as st


def _specs() -> tuple:
    from armory.contracts import ParamKind
    from armory.plugins import ParamConstraints, ParamSpec

    return (
        ParamSpec("host", ParamKind.STRING, required=True, constraints=ParamConstraints(pattern=r"[a-z.]+")),
        ParamSpec("port", ParamKind.INTEGER, required=True, constraints=ParamConstraints(minimum=1, maximum=65535)),
        ParamSpec("verbose", ParamKind.BOOLEAN, default=False),
        ParamSpec("shell", ParamKind.ENUM, default="sh", constraints=ParamConstraints(choices=("sh", "bash"))),
        ParamSpec("ports", ParamKind.LIST, item_kind=ParamKind.INTEGER, constraints=ParamConstraints(minimum=1)),
    )


class TestValidateForm:
    """validate_form() conversion and error collection."""

    def test_converts_all_kinds(self) -> None:
        from armory.plugins import validate_form

        result = validate_form(
            {"host": "example.com", "port": " 4444 ", "verbose": "yes", "shell": "bash", "ports": "1, 2 3"},
            _specs(),
        )

        assert result.ok
        assert dict(result.params) == {
            "host": "example.com",
            "port": 4444,
            "verbose": True,
            "shell": "bash",
            "ports": [1, 2, 3],
        }

    def test_only_submitted_fields_returned(self) -> None:
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": "1"}, _specs())

        assert dict(result.params) == {"host": "a", "port": 1}

    def test_unknown_fields_dropped(self) -> None:
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": "1", "extra": "x"}, _specs())

        assert "extra" not in result.params

    def test_missing_required(self) -> None:
        from armory.contracts import FieldErrorKind
        from armory.plugins import validate_form

        result = validate_form({"host": "a"}, _specs())

        assert not result.ok
        assert len(result.errors) == 1
        (error,) = result.errors
        assert error.field == "port"
        assert error.kind is FieldErrorKind.MISSING_REQUIRED
        assert error.message == "is required"

    def test_blank_counts_as_missing(self) -> None:
        from armory.contracts import FieldErrorKind
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": "   "}, _specs())

        assert [e.kind for e in result.errors] == [FieldErrorKind.MISSING_REQUIRED]

    def test_all_errors_collected_in_declaration_order(self) -> None:
        from armory.contracts import FieldErrorKind
        from armory.plugins import validate_form

        result = validate_form(
            {"host": "UPPER", "port": "abc", "verbose": "maybe", "shell": "zsh", "ports": "1, 0"},
            _specs(),
        )

        assert [(e.field, e.kind) for e in result.errors] == [
            ("host", FieldErrorKind.CONSTRAINT_VIOLATION),
            ("port", FieldErrorKind.INVALID_FORMAT),
            ("verbose", FieldErrorKind.INVALID_FORMAT),
            ("shell", FieldErrorKind.CONSTRAINT_VIOLATION),
            ("ports", FieldErrorKind.CONSTRAINT_VIOLATION),
        ]
        assert result.errors[1].value == "abc"

    @pytest.mark.parametrize("value,message", [("0", "must be >= 1"), ("65536", "must be <= 65535")])
    def test_integer_range(self, value: str, message: str) -> None:
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": value}, _specs())

        assert result.errors[0].message == message

    def test_scalar_given_several_values(self) -> None:
        from armory.contracts import FieldErrorKind
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": ["1", "2"]}, _specs())

        assert result.errors[0].kind is FieldErrorKind.INVALID_FORMAT

    def test_list_from_repeated_fields(self) -> None:
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": "1", "ports": ["1,2", "3"]}, _specs())

        assert result.params["ports"] == [1, 2, 3]

    def test_required_with_default_is_never_missing(self) -> None:
        from armory.contracts import ParamKind
        from armory.plugins import ParamSpec, validate_form

        specs = (ParamSpec("mode", ParamKind.STRING, required=True, default="fast"),)

        result = validate_form({}, specs)

        assert result.ok
        assert dict(result.params) == {}

    def test_pattern_is_full_match(self) -> None:
        from armory.plugins import validate_form

        result = validate_form({"host": "abc;rm", "port": "1"}, _specs())

        assert result.errors[0].field == "host"


class TestValidateFormProperties:
    """Properties over arbitrary submissions."""

    @given(
        st.dictionaries(
            st.sampled_from(["host", "port", "verbose", "shell", "ports", "junk", "other"]),
            st.one_of(st.text(max_size=20), st.lists(st.text(max_size=10), max_size=3)),
        )
    )
    def test_validated_keys_subset_of_submitted_and_declared(self, raw: dict) -> None:
        from armory.plugins import validate_form

        specs = _specs()
        result = validate_form(raw, specs)

        declared = {s.name for s in specs}
        if result.ok:
            assert set(result.params) <= set(raw) & declared
        else:
            assert result.errors
            assert {e.field for e in result.errors} <= declared

    @given(st.integers(min_value=1, max_value=65535))
    def test_in_range_integers_accepted(self, port: int) -> None:
        from armory.plugins import validate_form

        result = validate_form({"host": "a", "port": str(port)}, _specs())

        assert result.params["port"] == port

    @given(st.lists(st.integers(min_value=1, max_value=10**6), min_size=1, max_size=8))
    def test_lists_split_on_commas_and_spaces(self, values: list[int]) -> None:
        from armory.plugins import validate_form

        text = ", ".join(str(v) for v in values[: len(values) // 2])
        text += " " + " ".join(str(v) for v in values[len(values) // 2 :])

        result = validate_form({"host": "a", "port": "1", "ports": text}, _specs())

        assert result.params["ports"] == values


class TestSplitList:
    """Separator handling."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("a,b", ["a", "b"]),
            ("a, b", ["a", "b"]),
            ("a b\tc", ["a", "b", "c"]),
            (" a ,, b ", ["a", "b"]),
            ("", []),
        ],
    )
    def test_split(self, raw: str, expected: list[str]) -> None:
        from armory.plugins.validation import split_list

        assert split_list(raw) == expected
