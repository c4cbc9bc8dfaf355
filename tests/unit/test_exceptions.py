"""
Unit tests for exception hierarchy and error handling.

Tests exception creation, error codes and serialization.
"""

import uuid

import pytest

from rankmerge_core.exceptions import (
    DuplicateDocumentError,
    EmptyInputError,
    FusionError,
    InconsistentOrderError,
    RankMergeError,
    UnknownStrategyError,
    ValidationError,
)


class TestRankMergeErrorBase:
    """Test base RankMergeError exception."""

    def test_base_exception_creation(self):
        error = RankMergeError(message="Test error", error_code="ERR_001")

        assert error.message == "Test error"
        assert error.error_code == "ERR_001"
        assert str(error) == "Test error"

    def test_base_exception_default_details(self):
        error = RankMergeError(message="Test error")

        assert error.details == {}
        assert error.error_code == "ERR_UNKNOWN"

    def test_base_exception_correlation_id(self):
        correlation_id = str(uuid.uuid4())
        error = RankMergeError(message="Test error", correlation_id=correlation_id)

        assert error.correlation_id == correlation_id

    def test_base_exception_auto_correlation_id(self):
        error = RankMergeError(message="Test error")

        assert uuid.UUID(error.correlation_id)

    def test_to_dict(self):
        original = ValueError("boom")
        error = RankMergeError(
            message="Test error",
            error_code="ERR_001",
            details={"key": "value"},
            original_exception=original,
        )

        data = error.to_dict()

        assert data["error"] == "RankMergeError"
        assert data["message"] == "Test error"
        assert data["error_code"] == "ERR_001"
        assert data["details"] == {"key": "value"}
        assert data["original_error"] == "boom"


class TestErrorTaxonomy:
    """Test the concrete error types and their default codes."""

    @pytest.mark.parametrize(
        "error_class, code",
        [
            (ValidationError, "VAL_001"),
            (DuplicateDocumentError, "LIST_001"),
            (InconsistentOrderError, "LIST_002"),
            (FusionError, "FUSE_001"),
            (UnknownStrategyError, "STRAT_001"),
        ],
    )
    def test_default_error_codes(self, error_class, code):
        error = error_class("message")

        assert error.error_code == code
        assert isinstance(error, RankMergeError)

    def test_empty_input_default_message(self):
        error = EmptyInputError()

        assert error.error_code == "FUSE_001"
        assert "no input lists" in str(error)
        assert isinstance(error, FusionError)

    def test_list_errors_are_validation_errors(self):
        assert issubclass(DuplicateDocumentError, ValidationError)
        assert issubclass(InconsistentOrderError, ValidationError)

    def test_empty_input_is_not_validation_error(self):
        assert not issubclass(EmptyInputError, ValidationError)

    def test_catch_all_with_base(self):
        with pytest.raises(RankMergeError):
            raise UnknownStrategyError("unknown fusion strategy 'x'")
