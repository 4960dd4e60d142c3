"""Parameterizer aggregates: live parameters and reparameterization proposals."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Parameter:
    """A named registry parameter and its current value."""

    name: str
    value: int


@dataclass(frozen=True)
class ParameterProposal:
    """A proposal to change a parameter value.

    Attributes:
        prop_id: 32-byte proposal id as 0x hex (identity).
        name: Parameter name.
        value: Proposed value.
        deposit: Proposer's deposit.
        app_expiry: End of the application window (epoch seconds).
        challenge_id: Challenge against the proposal, 0 if none.
        proposer: Proposer address.
        accepted: Whether the value was adopted.
        expired: Whether the proposal is no longer active.
        last_updated_date_ts: Timestamp of the last change.
    """

    prop_id: str
    name: str
    value: int
    deposit: int = 0
    app_expiry: int = 0
    challenge_id: int = 0
    proposer: str = ""
    accepted: bool = False
    expired: bool = False
    last_updated_date_ts: int = 0

    @property
    def id(self) -> str:
        """Composite id: name + value + app expiry."""
        return f"{self.name}{self.value}{self.app_expiry}"

    def accept(self, updated_at: int) -> ParameterProposal:
        return replace(
            self, accepted=True, expired=True, last_updated_date_ts=updated_at
        )

    def expire(self, updated_at: int) -> ParameterProposal:
        return replace(self, expired=True, last_updated_date_ts=updated_at)

    def with_challenge(self, challenge_id: int, updated_at: int) -> ParameterProposal:
        return replace(
            self, challenge_id=challenge_id, last_updated_date_ts=updated_at
        )
