"""Government parameterizer repository ports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.government_parameter import (
        GovernmentParameter,
        GovernmentParameterProposal,
    )


@runtime_checkable
class GovernmentParameterRepository(Protocol):
    """Repository interface for government parameters keyed by name."""

    async def get_government_parameter(self, name: str) -> GovernmentParameter | None:
        ...

    async def update_government_parameter(self, parameter: GovernmentParameter) -> None:
        """Insert or replace a government parameter value."""
        ...


@runtime_checkable
class GovernmentProposalRepository(Protocol):
    """Repository interface for government proposals keyed by prop id."""

    async def get_government_proposal(
        self, prop_id: str
    ) -> GovernmentParameterProposal | None:
        ...

    async def create_government_proposal(
        self, proposal: GovernmentParameterProposal
    ) -> None:
        """Insert a new government proposal.

        Raises:
            DuplicateRecordError: If the prop id already exists.
        """
        ...

    async def update_government_proposal(
        self, proposal: GovernmentParameterProposal
    ) -> None:
        """Insert or replace a government proposal."""
        ...
