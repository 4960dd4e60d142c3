"""Test helpers for the governance processor tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    events: Builders for raw contract events

Usage:
    from tests.helpers import FakeTimeAuthority
    from tests.helpers import events as ev
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeTimeAuthority"]
