#!/usr/bin/env python3
"""Smoke script for the session API against a running server."""

import sys

import httpx


BASE_URL = "http://127.0.0.1:8001"

AC_SERVICE = {
    "id": "sub-ac",
    "category_id": "cat-appliance",
    "name": "AC Service",
    "serviceTime": "60",
    "attributes": {
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
    },
}


def load_session() -> str | None:
    print("=" * 60)
    print("Testing POST /api/v1/sessions")
    print("=" * 60)

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/sessions", json={"service": AC_SERVICE}, timeout=10.0)
        response.raise_for_status()

        data = response.json()
        print(f"✅ Success! Session ID: {data['session_id']}")
        for group in data["groups"]:
            print(f"  {group['name']}: {[o['id'] for o in group['options']]}")
        return data["session_id"]
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None


def select_and_book(session_id: str) -> bool:
    print("\n" + "=" * 60)
    print("Testing selections and GET /booking")
    print("=" * 60)

    steps = [
        {"attribute_name": "Type of AC", "option_id": "ac1"},
        {"attribute_name": "No.of Service", "option_id": "svc1"},
        {"attribute_name": "serviceSegments", "option_id": "seg1", "value": "Jet"},
    ]
    try:
        for step in steps:
            response = httpx.post(f"{BASE_URL}/api/v1/sessions/{session_id}/selections", json=step, timeout=10.0)
            response.raise_for_status()
            print(f"✅ Selected {step['attribute_name']} = {step['option_id']}")

        response = httpx.get(f"{BASE_URL}/api/v1/sessions/{session_id}/booking", timeout=10.0)
        response.raise_for_status()
        booking = response.json()
        print(f"✅ Booking request: segment={booking['segmentId']} filters={booking['filterList']}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False


def main():
    print("\n🚀 Testing Session API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload --port 8001")
        sys.exit(1)

    session_id = load_session()
    if session_id:
        select_and_book(session_id)

    print("\n" + "=" * 60)
    print("✅ Smoke run complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
