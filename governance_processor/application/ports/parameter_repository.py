"""Parameterizer repository ports: live parameters and proposals.

The parameterizer handler writes a proposal and its parameter with two
separate calls. There is no transaction spanning both repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.parameter import (
        Parameter,
        ParameterProposal,
    )


@runtime_checkable
class ParameterRepository(Protocol):
    """Repository interface for parameters keyed by name."""

    async def get_parameter(self, name: str) -> Parameter | None:
        ...

    async def create_parameter(self, parameter: Parameter) -> None:
        """Insert a new parameter.

        Raises:
            DuplicateRecordError: If the name already exists.
        """
        ...

    async def update_parameter(self, parameter: Parameter) -> None:
        """Insert or replace a parameter value."""
        ...


@runtime_checkable
class ParameterProposalRepository(Protocol):
    """Repository interface for reparameterization proposals keyed by prop id."""

    async def get_proposal(self, prop_id: str) -> ParameterProposal | None:
        """Get a proposal by its 0x prop id, None if no such record."""
        ...

    async def create_proposal(self, proposal: ParameterProposal) -> None:
        """Insert a new proposal.

        Raises:
            DuplicateRecordError: If the prop id already exists.
        """
        ...

    async def update_proposal(self, proposal: ParameterProposal) -> None:
        """Insert or replace a proposal."""
        ...
