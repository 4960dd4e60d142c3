"""In-memory EventSource for development and tests."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from governance_processor.application.ports.event_source import EventSource
from governance_processor.domain.events.contract_event import ContractEvent


class EventSourceStub(EventSource):
    """Serves seeded events with the same filtering as the SQL source.

    Events are returned ordered by (timestamp, block_number, tx_index,
    log_index); events seeded with the same key keep their seed order.
    """

    def __init__(self, events: Iterable[ContractEvent] = ()) -> None:
        self._events: list[ContractEvent] = list(events)
        self.requests: list[tuple[int, frozenset[str], str | None]] = []

    def seed_events(self, *events: ContractEvent) -> None:
        self._events.extend(events)

    async def retrieve_events(
        self,
        from_timestamp: int,
        exclude_hashes: Collection[str],
        contract_address: str | None = None,
    ) -> list[ContractEvent]:
        excluded = frozenset(exclude_hashes)
        self.requests.append((from_timestamp, excluded, contract_address))
        selected = [
            e
            for e in self._events
            if e.timestamp >= from_timestamp
            and e.hash not in excluded
            and (
                contract_address is None
                or e.contract_address.lower() == contract_address.lower()
            )
        ]
        return sorted(selected, key=lambda e: e.ordering_key)

    def reset(self) -> None:
        self._events.clear()
        self.requests.clear()
