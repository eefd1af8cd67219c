from __future__ import annotations

# One entry per vertical whose attribute tree needs more than the default
# nested-options behavior.
CASCADE_RULES: list[dict[str, object]] = [
    {
        "type": "merge_root",
        "root": "Type of AC",
        "satellites": [""],
        "preferred_tokens": ["split"],
        "unlabeled_labels": ["null", "None"],
    },
]
