"""Contracts whose events the processor understands."""

from __future__ import annotations

from enum import Enum


class ContractName(str, Enum):
    """Contract names as emitted by the crawler."""

    CIVIL_TCR = "CivilTCRContract"
    NEWSROOM = "NewsroomContract"
    PLCR_VOTING = "CivilPLCRVotingContract"
    PARAMETERIZER = "ParameterizerContract"
    GOVERNMENT = "GovernmentContract"
    MULTISIG = "MultiSigWalletContract"
    MULTISIG_FACTORY = "MultiSigWalletFactoryContract"
    CVL_TOKEN = "CVLTokenContract"

    @classmethod
    def from_name(cls, name: str) -> ContractName | None:
        """Look up a contract by crawler name, None if not handled here."""
        try:
            return cls(name)
        except ValueError:
            return None


def normalize_event_name(event_type: str) -> str:
    """Strip the crawler's leading/trailing spaces and underscores."""
    return event_type.strip(" _")
