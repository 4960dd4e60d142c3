"""Appeal aggregate (post-challenge dispute to the appellate)."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Appeal:
    """An appeal of a challenge outcome.

    Attributes:
        original_challenge_id: Challenge being appealed (identity).
        requester: Address that requested the appeal.
        appeal_fee_paid: Fee paid by the requester.
        appeal_phase_expiry: Deadline for the appellate to decide.
        granted: Whether the appellate granted the appeal.
        statement: Requester's statement.
        open_to_challenge_expiry: Deadline for challenging a granted appeal.
        appeal_challenge_id: Challenge against the granted appeal, if any.
        last_updated_date_ts: Event timestamp of the last change.
    """

    original_challenge_id: int
    requester: str = ""
    appeal_fee_paid: int = 0
    appeal_phase_expiry: int = 0
    granted: bool = False
    statement: str = ""
    open_to_challenge_expiry: int | None = None
    appeal_challenge_id: int | None = None
    last_updated_date_ts: int = 0

    def grant(self, open_to_challenge_expiry: int, updated_at: int) -> Appeal:
        return replace(
            self,
            granted=True,
            open_to_challenge_expiry=open_to_challenge_expiry,
            last_updated_date_ts=updated_at,
        )

    def with_appeal_challenge(self, appeal_challenge_id: int, updated_at: int) -> Appeal:
        return replace(
            self,
            appeal_challenge_id=appeal_challenge_id,
            last_updated_date_ts=updated_at,
        )
