"""Watermark: the durable processing cursor.

Block timestamps are coarse, so several events can share the last
timestamp. The cursor therefore pairs the timestamp with the hashes of the
events seen at exactly that timestamp; the next fetch asks for events at or
after the timestamp while excluding those hashes.

The hash set is only meaningful relative to its paired timestamp.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol


class _Timestamped(Protocol):
    @property
    def timestamp(self) -> int: ...

    @property
    def hash(self) -> str: ...


@dataclass(frozen=True)
class Watermark:
    """Processing cursor: (last_timestamp, hashes at last_timestamp)."""

    last_timestamp: int = 0
    hashes: frozenset[str] = field(default_factory=frozenset)

    def advanced_by(self, events: Iterable[_Timestamped]) -> Watermark | None:
        """Compute the cursor after a successfully processed batch.

        Returns None when no event in the batch is newer than
        last_timestamp; the stored cursor must then be left untouched.

        Args:
            events: The batch, in delivered order.

        Returns:
            The new Watermark, or None if it does not move.
        """
        batch = list(events)
        last_ts = self.last_timestamp
        updated = False
        for event in batch:
            if event.timestamp > last_ts:
                last_ts = event.timestamp
                updated = True
        if not updated:
            return None
        hashes = frozenset(e.hash for e in batch if e.timestamp == last_ts)
        return Watermark(last_timestamp=last_ts, hashes=hashes)
