"""Unit tests for data models."""

import pytest

from iedrename.models.ied import IEDRecord
from iedrename.models.rename import ItemView, RenameOp, ValidationReason, ValidationResult


class TestIEDRecord:
    """Tests for IEDRecord model."""

    @pytest.fixture
    def full_record(self):
        return IEDRecord(
            name="IED1",
            manufacturer="ABB",
            type="REL670",
            desc="Line protection",
            config_version="1.0",
            original_scl_version="2007",
            original_scl_revision="B",
            original_scl_release="4",
        )

    def test_first_line(self, full_record):
        assert full_record.first_line == "ABB - REL670"

    def test_second_line(self, full_record):
        assert full_record.second_line == "Line protection - 1.0 - 2007B4"

    def test_missing_fields_are_skipped(self):
        """Test that missing descriptive fields are left out of the lines."""
        record = IEDRecord(name="IED2", type="7SJ82", original_scl_version="2007")

        assert record.first_line == "7SJ82"
        assert record.second_line == "2007"

    def test_record_without_descriptions(self):
        record = IEDRecord(name="IED3")

        assert record.first_line == ""
        assert record.second_line == ""

    def test_searchable_text_includes_current_and_original_name(self, full_record):
        text = full_record.searchable_text("P1_BAY1")

        assert "ABB - REL670" in text
        assert "Line protection" in text
        assert "P1_BAY1" in text
        assert text.endswith("IED1")

    def test_sort_key(self, full_record):
        assert full_record.sort_key == "ABB - REL670 Line protection - 1.0 - 2007B4"

    def test_str_representation(self, full_record):
        result = str(full_record)

        assert "IED1" in result
        assert "ABB" in result


class TestValidationReason:
    """Tests for ValidationReason enum."""

    @pytest.mark.parametrize(
        "reason,fragment",
        [
            (ValidationReason.EMPTY, "fill in"),
            (ValidationReason.PATTERN_MISMATCH, "start with a letter"),
            (ValidationReason.LENGTH_OUT_OF_RANGE, "63"),
            (ValidationReason.DUPLICATE, "unique"),
        ],
    )
    def test_messages(self, reason, fragment):
        assert fragment in reason.message

    def test_valid_has_no_message(self):
        assert ValidationReason.VALID.message == ""

    def test_compares_as_string(self):
        assert ValidationReason.DUPLICATE == "DUPLICATE"


class TestRenameOp:
    """Tests for RenameOp model."""

    def test_as_tuple(self):
        assert RenameOp(old_name="IED1", new_name="P1").as_tuple() == ("IED1", "P1")

    def test_str_representation(self):
        assert str(RenameOp(old_name="IED1", new_name="P1")) == "RenameOp('IED1' -> 'P1')"


class TestValidationResult:
    """Tests for ValidationResult and ItemView validity."""

    def test_is_valid(self):
        result = ValidationResult(
            identity="IED1", value="P1", reason=ValidationReason.VALID, is_dirty=True, all_valid=True
        )

        assert result.is_valid

    def test_is_not_valid(self):
        result = ValidationResult(
            identity="IED1", value="", reason=ValidationReason.EMPTY, is_dirty=True, all_valid=False
        )

        assert not result.is_valid

    def test_item_view_defaults_visible(self):
        view = ItemView(identity="IED1", current_value="IED1", reason=ValidationReason.VALID, is_dirty=False)

        assert view.visible
        assert view.is_valid
