#!/usr/bin/env python3
"""
Interactive local selection harness (no HTTP).

Usage:
  python3 scripts/select_local.py path/to/service_details.json

What it does:
- Loads a service-details payload into one session
- Lets you pick options group by group, the same way the API does
- Prints the visible groups, resets, the filter list and readiness after each step
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.use_cases.attribute_session import AttributeSession
from app.wiring.dependencies import build_session


def _print_view(session: AttributeSession) -> None:
    view = session.view()
    print("\n--- Groups ---")
    for group in view.groups:
        indent = "  " * (group.level - 1)
        marker = "*" if group.required else " "
        options = ", ".join(f"{o.id}={o.display_name}" for o in group.options)
        selected = f" [{group.selected_id}]" if group.selected_id else ""
        print(f"{indent}{marker} {group.name}{selected}: {options}")
    if view.segments:
        print("segments: " + ", ".join(f"{s.id}={s.segment_name}" for s in view.segments))

    print("\n--- Filters ---")
    for entry in session.filters():
        print(f"  {entry.attribute_name}: {entry.option_id} ({entry.option_name})")
    validation = session.validate()
    print(f"valid: {validation.is_valid} missing: {validation.missing}")
    print(f"ready for booking: {session.is_ready_for_booking()}")
    print("-" * 60)


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        return
    payload = json.loads(Path(sys.argv[1]).read_text(encoding="utf-8"))

    session = build_session("local")
    schema = session.load(payload)
    for message in schema.diagnostics:
        print(f"! {message}")
    _print_view(session)
    print("Enter '<group name>=<option id>'. Commands: /clear, /booking, /quit")

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not line:
            continue
        if line in ("/quit", "/exit"):
            print("Bye!")
            return
        if line == "/clear":
            session.clear_all()
        elif line == "/booking":
            booking = session.booking_request()
            print(json.dumps(booking.to_payload(), indent=2) if booking else "(not ready)")
            continue
        elif "=" in line:
            name, option_id = line.split("=", 1)
            outcome = session.select(name.strip(), option_id.strip())
            if outcome.reset:
                print(f"reset: {', '.join(outcome.reset)}")
        else:
            print("Expected '<group name>=<option id>'")
            continue

        _print_view(session)


if __name__ == "__main__":
    main()
