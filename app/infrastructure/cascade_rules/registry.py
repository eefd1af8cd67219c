from __future__ import annotations

import logging
from typing import Any

from app.application.ports.cascade_rule import CascadeRulePort
from app.application.use_cases.cascade import CascadeRuleRegistry
from app.infrastructure.cascade_rules.merge_root import MergeRootCascadeRule
from app.infrastructure.cascade_rules.nested_options import NestedOptionsCascadeRule
from app.infrastructure.cascade_rules.rule_data import CASCADE_RULES

logger = logging.getLogger(__name__)


def build_rule(entry: dict[str, Any]) -> CascadeRulePort | None:
    rule_type = entry.get("type")
    if rule_type == "merge_root" and entry.get("root"):
        return MergeRootCascadeRule(
            root=str(entry["root"]),
            satellites=entry.get("satellites") or ("",),
            preferred_tokens=entry.get("preferred_tokens") or (),
            unlabeled_labels=entry.get("unlabeled_labels") or (),
        )
    if rule_type == "nested_options":
        return NestedOptionsCascadeRule(
            unlabeled_labels=entry.get("unlabeled_labels") or (),
            preferred_tokens=entry.get("preferred_tokens") or (),
        )
    logger.warning("Unknown cascade rule skipped", extra={"reason": str(rule_type)})
    return None


def build_cascade_registry(rules: list[dict[str, Any]] | None = None) -> CascadeRuleRegistry:
    registry = CascadeRuleRegistry(default_rule=NestedOptionsCascadeRule())
    for entry in CASCADE_RULES if rules is None else rules:
        rule = build_rule(entry)
        if rule is not None:
            registry.register(rule)
    return registry
