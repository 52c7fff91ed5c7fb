"""Tests for the error taxonomy."""


class TestErrorHierarchy:
    """Every error is an ArmoryError with its own fields."""

    def test_invalid_identifier_is_class_not_found(self) -> None:
        from armory.contracts import ArmoryError, ClassNotFound, InvalidIdentifier

        error = InvalidIdentifier("../etc/passwd", "payload")

        assert isinstance(error, ClassNotFound)
        assert isinstance(error, ArmoryError)
        assert error.identifier == "../etc/passwd"
        assert str(error) == "invalid payload identifier: '../etc/passwd'"

    def test_class_not_found_message(self) -> None:
        from armory.contracts import ClassNotFound

        error = ClassNotFound("nope", "encoder")

        assert error.kind == "encoder"
        assert str(error) == "encoder not found: 'nope'"

    def test_unsupported_param_kind_default_reason(self) -> None:
        from armory.contracts import UnsupportedParamKind

        error = UnsupportedParamKind("x/y", "blob", "binary")

        assert error.plugin == "x/y"
        assert error.param == "blob"
        assert "unsupported param kind 'binary'" in str(error)

    def test_bind_error_fields(self) -> None:
        from armory.contracts import BindError

        error = BindError("host", "unsafe")

        assert error.field == "host"
        assert error.reason == "unsafe"

    def test_job_params_error_joins_messages(self) -> None:
        from armory.contracts import FieldError, FieldErrorKind, JobParamsError

        error = JobParamsError(
            "nmap",
            [FieldError("targets", FieldErrorKind.MISSING_REQUIRED, "is required")],
        )

        assert error.job == "nmap"
        assert len(error.errors) == 1
        assert str(error) == "invalid nmap params: targets: is required"
