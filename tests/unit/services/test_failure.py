"""Unit tests for failure injection policies."""

import random

import pytest

from ticketapp.services.failure import (
    AlwaysFail,
    NeverFail,
    RandomFailure,
    policy_for_rate,
)


class TestDeterministicPolicies:
    """Test NeverFail and AlwaysFail."""

    def test_never_fail(self):
        assert NeverFail().should_fail("list") is False
        assert NeverFail().should_fail("delete") is False

    def test_always_fail(self):
        assert AlwaysFail().should_fail("list") is True
        assert AlwaysFail().should_fail("delete") is True

    def test_always_fail_restricted_to_operations(self):
        policy = AlwaysFail({"delete"})
        assert policy.should_fail("delete") is True
        assert policy.should_fail("list") is False


class TestRandomFailure:
    """Test RandomFailure."""

    def test_rate_bounds_validated(self):
        with pytest.raises(ValueError):
            RandomFailure(-0.1)
        with pytest.raises(ValueError):
            RandomFailure(1.1)

    def test_rate_one_always_fails(self):
        policy = RandomFailure(1.0, random.Random(0))
        assert all(policy.should_fail("list") for _ in range(20))

    def test_seeded_draws_are_reproducible(self):
        first = RandomFailure(0.5, random.Random(42))
        second = RandomFailure(0.5, random.Random(42))

        outcomes = [first.should_fail("delete") for _ in range(50)]
        assert outcomes == [second.should_fail("delete") for _ in range(50)]
        assert True in outcomes and False in outcomes


class TestPolicyForRate:
    """Test policy_for_rate."""

    def test_zero_rate_never_fails(self):
        assert isinstance(policy_for_rate(0.0), NeverFail)

    def test_positive_rate_is_random(self):
        policy = policy_for_rate(0.3, seed=1)
        assert isinstance(policy, RandomFailure)
        assert policy.rate == 0.3
