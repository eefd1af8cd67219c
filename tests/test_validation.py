"""
Tests for required-attribute validation and booking readiness.
"""

from __future__ import annotations

from app.application.utils.schema_reader import parse_attribute_schema
from app.application.utils.state_helpers import attribute_display_info, has_selections_changed, selection_summary
from app.application.utils.validation import is_ready_for_booking, required_attributes, validate_selections
from app.domain.entities.selection_state import Selection
from app.domain.entities.validation import ValidationResult


def test_required_attributes_from_raw_and_parsed(cleaning_schema):
    assert required_attributes(cleaning_schema) == ["Home Size"]
    assert required_attributes(parse_attribute_schema(cleaning_schema)) == ["Home Size"]
    assert required_attributes(None) == []


def test_satellite_key_never_required():
    raw = {"": {"list": [{"id": "deal", "required": True, "options": {}}]}}
    assert required_attributes(raw) == []


def test_missing_required_selection(cleaning_schema):
    result = validate_selections({"Add-on": "fridge"}, required_attributes(cleaning_schema))

    assert result == ValidationResult(is_valid=False, missing=["Home Size"], errors=["Home Size is required"])
    assert result.to_payload() == {
        "isValid": False,
        "missing": ["Home Size"],
        "errors": ["Home Size is required"],
    }


def test_only_missing_required_are_reported():
    result = validate_selections({"A": "x"}, ["A", "B"])

    assert result.is_valid is False
    assert result.missing == ["B"]


def test_valid_iff_every_required_selected(cleaning_schema):
    required = required_attributes(cleaning_schema)

    assert validate_selections({"Home Size": {"id": "bhk1"}}, required).is_valid is True
    assert validate_selections({"Home Size": {"id": ""}}, required).is_valid is False
    assert validate_selections({}, required).is_valid is False
    assert validate_selections(None, required).missing == ["Home Size"]
    assert validate_selections({}, []).is_valid is True


def test_stale_option_id_counts_as_missing():
    result = validate_selections(
        {"Home Size": Selection(id="bhk9")},
        ["Home Size"],
        available_ids={"Home Size": {"bhk1", "bhk2"}},
    )

    assert result.missing == ["Home Size"]


def test_ready_for_booking(cleaning_schema):
    schema = parse_attribute_schema(cleaning_schema)
    ok = ValidationResult(is_valid=True)

    assert is_ready_for_booking(schema, ok) is True
    assert is_ready_for_booking(schema, ValidationResult(is_valid=False, missing=["Home Size"])) is False
    assert is_ready_for_booking(parse_attribute_schema({}), ok) is False
    assert is_ready_for_booking(parse_attribute_schema([]), ok) is False


def test_display_info(cleaning_schema):
    schema = parse_attribute_schema(cleaning_schema)

    assert attribute_display_info("Home Size", schema.get("Home Size")) == {
        "name": "Home Size",
        "display_name": "Home Size",
        "type": "dropdown",
        "option_count": 3,
        "is_required": True,
    }
    assert attribute_display_info("Gone", None)["type"] == "unknown"


def test_selection_summary_skips_unknown_and_empty(cleaning_schema):
    schema = parse_attribute_schema(cleaning_schema)
    summary = selection_summary(
        {"Home Size": Selection(id="bhk1", value="1 BHK"), "Add-on": Selection(id=""), "Colour": "red"},
        schema,
    )

    assert summary == [
        {
            "attribute_name": "Home Size",
            "display_name": "Home Size",
            "selected_value": "1 BHK",
            "selected_id": "bhk1",
            "type": "dropdown",
        }
    ]


def test_has_selections_changed():
    assert has_selections_changed(None, None) is False
    assert has_selections_changed(None, {}) is True
    assert has_selections_changed({"a": "1"}, {"a": Selection(id="1", value="other")}) is False
    assert has_selections_changed({"a": "1"}, {"a": "2"}) is True
    assert has_selections_changed({"a": "1"}, {"a": "1", "b": "2"}) is True


if __name__ == "__main__":
    import pytest

    raise SystemExit(pytest.main([__file__, "-v"]))
