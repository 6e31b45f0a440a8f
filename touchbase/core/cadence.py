"""Cadence policy — how often each tier expects a touchpoint.

No I/O: this module only maps tags to numbers and labels.
"""

from __future__ import annotations

import logging

from touchbase.data.models import FRIEND_TIERS, NETWORK_TIERS

logger = logging.getLogger(__name__)

# Days between expected interactions.
# close_friend / active -> bi-weekly; keep_warm -> monthly; dont_lose_touch -> quarterly.
CADENCE_DAYS: dict[str, int] = {
    "close_friend": 14,
    "active": 14,
    "keep_warm": 30,
    "dont_lose_touch": 90,
}

DEFAULT_INTERVAL_DAYS = 30
FALLBACK_TIER = "keep_warm"

_TIER_LABELS = {
    "close_friend": "Close Friend",
    "active": "Active",
    "keep_warm": "Keep Warm",
    "dont_lose_touch": "Don't Lose Touch",
}

_METHOD_LABELS = {
    "call": "Call",
    "facetime": "FaceTime",
    "text": "Text",
    "email": "Email",
    "in_person": "In Person",
}


def expected_interval_days(tier: str | None) -> int:
    """Return the expected days between interactions; 30 for unknown tiers."""
    return CADENCE_DAYS.get(tier, DEFAULT_INTERVAL_DAYS)


def valid_tiers(relationship_class: str) -> tuple[str, ...]:
    """Return the tiers allowed for a relationship class (empty if unknown)."""
    if relationship_class == "friend":
        return FRIEND_TIERS
    if relationship_class == "network":
        return NETWORK_TIERS
    return ()


def normalize_tier(relationship_class: str, tier: str | None) -> str:
    """Return `tier` if valid for the class, otherwise the fallback tier.

    keep_warm is valid for both classes and has the default interval, so the
    fallback never changes how overdue a contact looks.
    """
    if tier in valid_tiers(relationship_class):
        return tier
    logger.debug(
        "Tier %r not valid for %r, falling back to %s",
        tier, relationship_class, FALLBACK_TIER,
    )
    return FALLBACK_TIER


def tier_label(tier: str) -> str:
    return _TIER_LABELS.get(tier, tier)


def contact_method_label(method: str) -> str:
    """Display label for an interaction type; unknown types read "In Person"."""
    return _METHOD_LABELS.get(method, "In Person")
