"""Unit tests for contract event decoding."""

import pytest

from governance_processor.domain.errors import EventDecodeError
from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.events.contract_names import (
    ContractName,
    normalize_event_name,
)
from governance_processor.domain.events.decoder import EVENT_DECODERS, decode_event
from governance_processor.domain.events.payloads import (
    ApplicationPayload,
    NameChangedPayload,
    ProposalPayload,
    TransferPayload,
)
from tests.helpers import events as ev


class TestNormalizeEventName:
    @pytest.mark.parametrize(
        "raw,expected",
        [("_Application", "Application"), ("Transfer", "Transfer"), (" _Deposit ", "Deposit")],
    )
    def test_strips_crawler_prefix(self, raw: str, expected: str) -> None:
        assert normalize_event_name(raw) == expected


class TestDecodeEvent:
    def test_application_payload_is_typed_and_lowercased(self) -> None:
        event = ev.application(ev.NEWSROOM.upper().replace("0X", "0x"), deposit=7)

        decoded = decode_event(event)

        assert decoded is not None
        assert decoded.key == (ContractName.CIVIL_TCR, "Application")
        assert isinstance(decoded.payload, ApplicationPayload)
        assert decoded.payload.listing_address == ev.NEWSROOM
        assert decoded.payload.deposit == 7
        assert decoded.payload.applicant == ev.APPLICANT

    def test_numeric_strings_and_hex_are_integers(self) -> None:
        event = ev.transfer(ev.APPLICANT, ev.VOTER, 0)
        event = ContractEvent(
            contract_name=event.contract_name,
            event_type=event.event_type,
            contract_address=event.contract_address,
            timestamp=event.timestamp,
            hash=event.hash,
            payload={"From": ev.APPLICANT, "To": ev.VOTER, "Value": "0x10"},
        )

        decoded = decode_event(event)

        assert decoded is not None
        assert isinstance(decoded.payload, TransferPayload)
        assert decoded.payload.value == 16

    def test_newsroom_events_use_emitter_as_listing(self) -> None:
        decoded = decode_event(ev.name_changed("The Daily", ev.OTHER_NEWSROOM))

        assert decoded is not None
        assert isinstance(decoded.payload, NameChangedPayload)
        assert decoded.payload.listing_address == ev.OTHER_NEWSROOM
        assert decoded.payload.new_name == "The Daily"

    def test_bytes_prop_id_becomes_hex(self) -> None:
        event = ev.proposal_event("_ProposalAccepted", prop_id="unused")
        event = ContractEvent(
            contract_name=event.contract_name,
            event_type=event.event_type,
            contract_address=event.contract_address,
            timestamp=event.timestamp,
            hash=event.hash,
            payload={"PropID": bytes.fromhex("ab" * 32)},
        )

        decoded = decode_event(event)

        assert decoded is not None
        assert isinstance(decoded.payload, ProposalPayload)
        assert decoded.payload.prop_id == ev.PROP_ID

    def test_prop_id_string_is_normalised(self) -> None:
        decoded = decode_event(
            ev.proposal_event("_ProposalExpired", prop_id="AB" * 32)
        )

        assert decoded is not None
        assert decoded.payload.prop_id == ev.PROP_ID

    def test_unknown_contract_is_not_handled(self) -> None:
        event = ev.make_event(
            "SomeOtherContract",
            "Transfer",
            {},
            timestamp=1,
            contract_address=ev.TOKEN_ADDRESS,
        )

        assert decode_event(event) is None

    def test_unknown_event_of_known_contract_is_not_handled(self) -> None:
        event = ev.make_event(
            ContractName.CIVIL_TCR,
            "_GovernmentTransfered",
            {},
            timestamp=1,
            contract_address=ev.TCR_ADDRESS,
        )

        assert decode_event(event) is None

    def test_missing_field_raises_decode_error(self) -> None:
        event = ev.listing_status("_ApplicationWhitelisted")
        broken = ContractEvent(
            contract_name=event.contract_name,
            event_type=event.event_type,
            contract_address=event.contract_address,
            timestamp=event.timestamp,
            hash="0xbroken",
            payload={},
        )

        with pytest.raises(EventDecodeError) as exc_info:
            decode_event(broken)

        assert exc_info.value.event_hash == "0xbroken"
        assert exc_info.value.field_name == "ListingAddress"
        assert exc_info.value.reason == "missing"

    @pytest.mark.parametrize("value", ["not-a-number", True, 1.5])
    def test_bad_integer_raises_decode_error(self, value: object) -> None:
        event = ev.make_event(
            ContractName.PLCR_VOTING,
            "_PollCreated",
            {
                "PollID": value,
                "VoteQuorum": 50,
                "CommitEndDate": 1,
                "RevealEndDate": 2,
                "Creator": ev.CHALLENGER,
            },
            timestamp=1,
            contract_address=ev.PLCR_ADDRESS,
        )

        with pytest.raises(EventDecodeError, match="PollID"):
            decode_event(event)

    def test_optional_reward_pool_absent(self) -> None:
        decoded = decode_event(ev.challenge_resolved("_ChallengeFailed", 3))

        assert decoded is not None
        assert decoded.payload.reward_pool is None

    def test_every_decoder_key_names_a_known_contract(self) -> None:
        for contract, name in EVENT_DECODERS:
            assert isinstance(contract, ContractName)
            assert name == normalize_event_name(name)
