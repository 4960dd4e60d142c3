"""Listing governance state (registry lifecycle).

State Machine:
    NONE -> APPLIED (Application)
    APPLIED -> CHALLENGED | APP_WHITELISTED | APP_REMOVED | WITHDRAWN
    CHALLENGED -> APP_WHITELISTED | APPLIED (challenge failed)
    CHALLENGED -> REMOVED | APP_REMOVED (challenge succeeded)
    CHALLENGED -> APPEAL_REQUESTED -> APPEAL_GRANTED -> GRANTED_APPEAL_CHALLENGED
    GRANTED_APPEAL_CHALLENGED -> GRANTED_APPEAL_CONFIRMED | GRANTED_APPEAL_OVERTURNED
    APP_WHITELISTED -> CHALLENGED | REMOVED | WITHDRAWN | TOUCH_REMOVED

Only APP_WHITELISTED carries whitelisted=True on a Listing.
"""

from __future__ import annotations

from enum import Enum


class GovernanceState(Enum):
    """Last governance state recorded for a listing."""

    NONE = "none"
    APPLIED = "applied"
    CHALLENGED = "challenged"
    APP_WHITELISTED = "app_whitelisted"
    APP_REMOVED = "app_removed"
    REMOVED = "removed"
    WITHDRAWN = "withdrawn"
    TOUCH_REMOVED = "touch_removed"
    APPEAL_REQUESTED = "appeal_requested"
    APPEAL_GRANTED = "appeal_granted"
    GRANTED_APPEAL_CHALLENGED = "granted_appeal_challenged"
    GRANTED_APPEAL_CONFIRMED = "granted_appeal_confirmed"
    GRANTED_APPEAL_OVERTURNED = "granted_appeal_overturned"

    @property
    def is_removed(self) -> bool:
        """Check if the listing is off the registry in this state."""
        return self in REMOVED_STATES


REMOVED_STATES: frozenset[GovernanceState] = frozenset(
    {
        GovernanceState.APP_REMOVED,
        GovernanceState.REMOVED,
        GovernanceState.WITHDRAWN,
        GovernanceState.TOUCH_REMOVED,
    }
)
