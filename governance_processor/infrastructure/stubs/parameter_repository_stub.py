"""In-memory parameterizer repositories for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.parameter_repository import (
    ParameterProposalRepository,
    ParameterRepository,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.parameter import Parameter, ParameterProposal


class ParameterRepositoryStub(ParameterRepository):
    """Stores current parameter values keyed by name."""

    def __init__(self) -> None:
        self._parameters: dict[str, Parameter] = {}

    async def get_parameter(self, name: str) -> Parameter | None:
        return self._parameters.get(name)

    async def create_parameter(self, parameter: Parameter) -> None:
        if parameter.name in self._parameters:
            raise DuplicateRecordError("parameter", parameter.name)
        self._parameters[parameter.name] = parameter

    async def update_parameter(self, parameter: Parameter) -> None:
        self._parameters[parameter.name] = parameter

    def seed_parameter(self, parameter: Parameter) -> None:
        self._parameters[parameter.name] = parameter

    def reset(self) -> None:
        self._parameters.clear()


class ParameterProposalRepositoryStub(ParameterProposalRepository):
    """Stores reparameterization proposals keyed by prop id."""

    def __init__(self) -> None:
        self._proposals: dict[str, ParameterProposal] = {}

    async def get_proposal(self, prop_id: str) -> ParameterProposal | None:
        return self._proposals.get(prop_id)

    async def create_proposal(self, proposal: ParameterProposal) -> None:
        if proposal.prop_id in self._proposals:
            raise DuplicateRecordError("proposal", proposal.prop_id)
        self._proposals[proposal.prop_id] = proposal

    async def update_proposal(self, proposal: ParameterProposal) -> None:
        self._proposals[proposal.prop_id] = proposal

    def seed_proposal(self, proposal: ParameterProposal) -> None:
        self._proposals[proposal.prop_id] = proposal

    def reset(self) -> None:
        self._proposals.clear()
