"""Contract events consumed by the processor and their typed payloads."""

from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.events.contract_names import (
    ContractName,
    normalize_event_name,
)
from governance_processor.domain.events.decoder import (
    EVENT_DECODERS,
    DecodedEvent,
    EventKey,
    decode_event,
)

__all__: list[str] = [
    "EVENT_DECODERS",
    "ContractEvent",
    "ContractName",
    "DecodedEvent",
    "EventKey",
    "decode_event",
    "normalize_event_name",
]
