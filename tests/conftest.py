"""
Shared attribute schemas for the selection engine tests.
"""

from __future__ import annotations

import copy

import pytest

from app.application.use_cases.attribute_session import AttributeSession
from app.application.use_cases.cascade import CascadeResolver
from app.infrastructure.cascade_rules.registry import build_cascade_registry

AC_SCHEMA = {
    "Type of AC": {
        "list": [
            {
                "id": "ac1",
                "name": "split",
                "required": True,
                "options": {"No.of Service": [{"id": "svc1", "value": "1", "weight": 1}]},
                "serviceSegments": [{"id": "seg1", "segment_name": "Jet"}],
            }
        ]
    }
}

AC_FULL_SCHEMA = {
    "Type of AC": {
        "list": [
            {
                "id": "ac-window",
                "name": "window",
                "required": True,
                "options": {"No.of Service": [{"id": "w2", "value": "2", "weight": 2}, {"id": "w1", "value": "1", "weight": 1}]},
                "serviceSegments": [{"id": "seg-w", "segment_name": "Jet"}],
            },
            {
                "id": "ac-split",
                "name": "split",
                "options": {
                    "No.of Service": [
                        {"id": "s1", "value": "1", "weight": 1},
                        {"id": "s2", "value": "2", "weight": 2},
                    ]
                },
                "serviceSegments": [
                    {"id": "seg-jet", "segment_name": "Jet"},
                    {"id": "seg-foam", "segment_name": "Foam + Jet"},
                ],
            },
        ]
    },
    "": {
        "list": [
            {
                "id": "deal",
                "name": "Super Saver Deal",
                "options": {"null": [{"id": "plan-b", "value": "3 services", "weight": 2}, {"id": "plan-a", "value": "2 services", "weight": 1}]},
            }
        ]
    },
}

CLEANING_SCHEMA = {
    "Home Size": {
        "dropdown": [
            {
                "id": "attr-size",
                "name": "Home Size",
                "is_required": True,
                "options": {
                    "standard": [
                        {"id": "bhk3", "value": "3 BHK", "weight": 3},
                        {"id": "bhk1", "value": "1 BHK", "weight": 1},
                        {"id": "bhk2", "value": "2 BHK", "weight": 2},
                    ]
                },
            }
        ]
    },
    "Add-on": {
        "search": [
            {
                "id": "attr-addon",
                "name": "Add-on",
                "options": {"extras": [{"id": "fridge", "value": "Fridge", "weight": 0}, {"id": "NA", "value": "None", "weight": 9}]},
            }
        ]
    },
}


@pytest.fixture
def ac_schema() -> dict:
    return copy.deepcopy(AC_SCHEMA)


@pytest.fixture
def ac_full_schema() -> dict:
    return copy.deepcopy(AC_FULL_SCHEMA)


@pytest.fixture
def cleaning_schema() -> dict:
    return copy.deepcopy(CLEANING_SCHEMA)


@pytest.fixture
def resolver() -> CascadeResolver:
    return CascadeResolver(registry=build_cascade_registry())


@pytest.fixture
def auto_resolver() -> CascadeResolver:
    return CascadeResolver(registry=build_cascade_registry(), auto_select=True)


@pytest.fixture
def session(resolver: CascadeResolver) -> AttributeSession:
    return AttributeSession(resolver=resolver, session_id="test-session")
