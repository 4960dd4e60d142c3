"""MultiSig wallet aggregates."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class MultiSig:
    """A multisig wallet and its current owners."""

    contract_address: str
    owner_addresses: tuple[str, ...] = ()

    def with_owners(self, owners: tuple[str, ...]) -> MultiSig:
        return replace(self, owner_addresses=tuple(dict.fromkeys(owners)))


@dataclass(frozen=True)
class MultiSigOwner:
    """One owner row of a multisig wallet."""

    owner_address: str
    multisig_address: str
