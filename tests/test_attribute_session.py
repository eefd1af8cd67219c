"""
Tests for a full service-details session: load, select, segments, booking.
"""

from __future__ import annotations

from app.application.use_cases.attribute_session import AttributeSession
from app.domain.entities.selection_state import SEGMENT_KEY
from app.domain.entities.service_details import ServiceDetails
from app.infrastructure.store.memory_store import MemorySessionStore


def _payload(attributes: dict) -> dict:
    return {
        "id": "sub-ac",
        "category_id": "cat-appliance",
        "name": " AC Service ",
        "serviceTime": "60",
        "attributes": attributes,
    }


def test_service_details_from_payload(ac_schema):
    details = ServiceDetails.from_payload(_payload(ac_schema))

    assert details.service_id == "sub-ac"
    assert details.category_id == "cat-appliance"
    assert details.name == "AC Service"
    assert details.service_time == "60"
    assert "Type of AC" in details.attributes


def test_service_details_fallbacks():
    details = ServiceDetails.from_payload({"name": "Sofa"}, service_id="svc-7")

    assert details.service_id == "svc-7"
    assert details.category_id == "svc-7"
    assert details.attributes == {}
    assert ServiceDetails.from_payload({"attributes": "bad"}).attributes == "bad"
    assert ServiceDetails.from_payload(None).service_id == ""


def test_full_ac_booking(session, ac_schema):
    session.load(_payload(ac_schema))

    assert session.is_ready_for_booking() is False
    assert session.booking_request() is None

    session.select("Type of AC", "ac1")
    session.select("No.of Service", "svc1")
    session.select(SEGMENT_KEY, "seg1", "Jet")

    assert session.is_ready_for_booking() is True
    assert session.booking_request().to_payload() == {
        "catIdValue": "cat-appliance",
        "subCatIdValue": "sub-ac",
        "filterList": [
            {"attribute_id": "ac1", "option_id": "ac1", "attribute_name": "Type of AC", "option_name": "split"}
        ],
        "segmentId": "seg1",
        "serviceNameValue": "AC Service",
        "timeRequired": "60",
    }


def test_load_replaces_previous_selections(session, ac_schema, cleaning_schema):
    session.load(_payload(ac_schema))
    session.select("Type of AC", "ac1")

    session.load(_payload(cleaning_schema))

    assert session.state().selections == {}
    assert session.filters() == []
    assert list(session.schema.groups) == ["Home Size", "Add-on"]
    assert session.required_attributes() == ["Home Size"]


def test_malformed_payload_is_not_ready(session):
    schema = session.load({"attributes": ["not", "a", "map"]})

    assert schema.is_valid is False
    assert session.validate().is_valid is True
    assert session.is_ready_for_booking() is False


def test_validation_reports_missing(session, cleaning_schema):
    session.load(_payload(cleaning_schema))
    session.select("Add-on", "fridge")

    assert session.validate().errors == ["Home Size is required"]

    session.select("Home Size", "bhk2")
    assert session.validate().is_valid is True


def test_unknown_optional_option_stays_out_of_payload(session, cleaning_schema):
    """An option id the schema does not offer never reaches the filters, even on an optional group."""
    session.load(_payload(cleaning_schema))
    session.select("Home Size", "bhk1")
    session.select("Add-on", "gone-option")

    assert session.validate().is_valid is True
    assert [entry.attribute_name for entry in session.filters()] == ["Home Size"]
    booking = session.booking_request()
    assert [entry.option_id for entry in booking.filter_list] == ["bhk1"]

    session.select("Add-on", "NA")
    assert session.filters()[-1].option_id == ""


def test_unknown_segment_stays_out_of_payload(session, ac_schema):
    session.load(_payload(ac_schema))
    session.select("Type of AC", "ac1")
    session.select(SEGMENT_KEY, "seg-bogus")

    assert session.state().selected_segment_id == "seg-bogus"
    assert session.booking_request().segment_id == ""
    assert session.segment_query().segment_id == ""

    session.receive_segments([{"id": "seg-bogus", "segment_name": "Priced"}])
    assert session.booking_request().segment_id == "seg-bogus"


def test_segment_query_uses_current_filters(session, ac_full_schema):
    session.load(_payload(ac_full_schema))
    session.select("Type of AC", "ac-split")
    session.select("No.of Service", "s2")

    query = session.segment_query(subcategory_id="sub-ac")

    assert query.to_payload() == {
        "category_id": "cat-appliance",
        "subcategory_id": "sub-ac",
        "segment_id": "",
        "attribute": [
            {"attribute_id": "ac-window", "option_id": "ac-split", "attribute_name": "Type of AC", "option_name": "split"}
        ],
    }
    assert session.segment_query(segment_id="seg-foam").segment_id == "seg-foam"


def test_segment_results_pick_first_segment(session, ac_full_schema):
    session.load(_payload(ac_full_schema))
    session.select("Type of AC", "ac-split")

    segments = session.receive_segments(
        [{"id": "seg-jet", "segment_name": "Jet", "price": 499}, {"id": "seg-foam", "segment_name": "Foam + Jet"}]
    )

    assert [segment.id for segment in segments] == ["seg-jet", "seg-foam"]
    assert session.state().selected_segment_id == "seg-jet"

    session.select(SEGMENT_KEY, "seg-foam")
    session.receive_segments([{"id": "seg-jet"}])
    assert session.state().selected_segment_id == "seg-foam"


def test_segment_results_without_auto_pick(resolver, ac_full_schema):
    session = AttributeSession(resolver=resolver, auto_select_first_segment=False)
    session.load(_payload(ac_full_schema))
    session.receive_segments([{"id": "seg-jet"}])

    assert session.state().selected_segment is None
    assert [segment.id for segment in session.available_segments] == ["seg-jet"]


def test_auto_select_on_load(auto_resolver, ac_full_schema):
    session = AttributeSession(resolver=auto_resolver)
    session.load(_payload(ac_full_schema))

    assert session.state().selected_id("Type of AC") == "ac-split"
    assert session.state().selected_segment_id == "seg-jet"


def test_summary_stats_and_change_detection(session, cleaning_schema):
    session.load(_payload(cleaning_schema))
    session.select("Home Size", "bhk1")
    before = session.state().selections

    assert session.summary()[0]["selected_value"] == "1 BHK"
    assert session.stats() == {
        "total": 2,
        "supported": 2,
        "unsupported": 0,
        "required": 1,
        "selected": 1,
        "valid": True,
    }
    assert session.has_changed_since(before) is False

    session.select("Home Size", "bhk2")
    assert session.has_changed_since(before) is True


def test_clear_all(session, ac_schema):
    session.load(_payload(ac_schema))
    session.select("Type of AC", "ac1")
    session.select(SEGMENT_KEY, "seg1")

    session.clear_all()

    assert session.state().selections == {}
    assert session.state().selected_segment is None


def test_memory_store_evicts_oldest(resolver):
    store = MemorySessionStore(
        session_factory=lambda session_id: AttributeSession(resolver=resolver, session_id=session_id),
        session_limit=2,
    )
    store.create("a")
    store.create("b")
    store.get("a")
    store.create("c")

    assert len(store) == 2
    assert store.get("b") is None
    assert store.get("a").session_id == "a"
    assert store.discard("c") is True
    assert store.discard("c") is False
    assert store.create().session_id


if __name__ == "__main__":
    import pytest

    raise SystemExit(pytest.main([__file__, "-v"]))
