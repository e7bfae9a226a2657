"""Test helpers for the amendment engine."""

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.proposal_factory import make_proposal, make_vote

__all__ = ["FakeTimeAuthority", "make_proposal", "make_vote"]
