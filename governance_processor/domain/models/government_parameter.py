"""Government parameterizer aggregates (appellate-controlled parameters)."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GovernmentParameter:
    """A named government parameter and its current value."""

    name: str
    value: int


@dataclass(frozen=True)
class GovernmentParameterProposal:
    """A proposal to change a government parameter, decided by a poll.

    Attributes:
        prop_id: 32-byte proposal id as 0x hex (identity).
        name: Parameter name.
        value: Proposed value.
        app_expiry: Proposal processing deadline (epoch seconds).
        poll_id: Poll deciding the proposal.
        accepted: Whether the value was adopted.
        expired: Whether the proposal is no longer active.
        last_updated_date_ts: Timestamp of the last change.
    """

    prop_id: str
    name: str
    value: int
    app_expiry: int = 0
    poll_id: int = 0
    accepted: bool = False
    expired: bool = False
    last_updated_date_ts: int = 0

    @property
    def id(self) -> str:
        return f"{self.name}{self.value}{self.app_expiry}"

    def accept(self, updated_at: int) -> GovernmentParameterProposal:
        return replace(
            self, accepted=True, expired=True, last_updated_date_ts=updated_at
        )

    def expire(self, updated_at: int) -> GovernmentParameterProposal:
        return replace(self, expired=True, last_updated_date_ts=updated_at)
