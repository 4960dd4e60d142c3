"""In-memory government parameterizer repositories for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.government_parameter_repository import (
    GovernmentParameterRepository,
    GovernmentProposalRepository,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.government_parameter import (
    GovernmentParameter,
    GovernmentParameterProposal,
)


class GovernmentParameterRepositoryStub(GovernmentParameterRepository):
    def __init__(self) -> None:
        self._parameters: dict[str, GovernmentParameter] = {}

    async def get_government_parameter(self, name: str) -> GovernmentParameter | None:
        return self._parameters.get(name)

    async def update_government_parameter(self, parameter: GovernmentParameter) -> None:
        self._parameters[parameter.name] = parameter

    def reset(self) -> None:
        self._parameters.clear()


class GovernmentProposalRepositoryStub(GovernmentProposalRepository):
    def __init__(self) -> None:
        self._proposals: dict[str, GovernmentParameterProposal] = {}

    async def get_government_proposal(
        self, prop_id: str
    ) -> GovernmentParameterProposal | None:
        return self._proposals.get(prop_id)

    async def create_government_proposal(
        self, proposal: GovernmentParameterProposal
    ) -> None:
        if proposal.prop_id in self._proposals:
            raise DuplicateRecordError("government_proposal", proposal.prop_id)
        self._proposals[proposal.prop_id] = proposal

    async def update_government_proposal(
        self, proposal: GovernmentParameterProposal
    ) -> None:
        self._proposals[proposal.prop_id] = proposal

    def seed_government_proposal(self, proposal: GovernmentParameterProposal) -> None:
        self._proposals[proposal.prop_id] = proposal

    def reset(self) -> None:
        self._proposals.clear()
