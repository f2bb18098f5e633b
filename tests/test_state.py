import pytest

from feedistrib.errors import OverflowError_
from feedistrib.state import Config, OwnershipProposal, State
from feedistrib.utils import UINT128_MAX


def test_reward_for_missing_period_is_zero():
    assert State().reward_for(3) == 0


def test_add_reward_accumulates():
    state = State()
    assert state.add_reward(0, 100_000_000) == 100_000_000
    assert state.add_reward(0, 100_000_000) == 200_000_000
    assert state.reward_for(0) == 200_000_000


def test_rewards_after_in_ascending_order():
    state = State()
    for period in (4, 2, 3, 1):
        state.add_reward(period, 100_000_000)
    state.add_reward(0, 200_000_000)
    assert state.rewards_after(None, None) == [
        200_000_000,
        100_000_000,
        100_000_000,
        100_000_000,
        100_000_000,
    ]


def test_rewards_after_excludes_start_and_applies_limit():
    state = State()
    for period in range(5):
        state.add_reward(period, period + 1)
    assert state.rewards_after(1, None) == [3, 4, 5]
    assert state.rewards_after(None, 2) == [1, 2]
    assert state.rewards_after(4, 10) == []


def test_add_reward_overflow_leaves_value():
    state = State()
    state.add_reward(0, UINT128_MAX)
    with pytest.raises(OverflowError_):
        state.add_reward(0, 1)
    assert state.reward_for(0) == UINT128_MAX


def test_last_claim_period_round_trip():
    state = State()
    assert state.last_claim_period("user1") is None
    state.set_last_claim_period("user1", 5)
    assert state.last_claim_period("user1") == 5
    assert state.last_claim_period("user2") is None


def test_config_and_proposal_stored():
    config = Config("owner", "token", "voting_escrow", 10, False)
    proposal = OwnershipProposal("new_owner", 100)
    state = State(config=config, ownership_proposal=proposal)
    assert state.config == Config("owner", "token", "voting_escrow", 10, False)
    assert state.ownership_proposal.owner == "new_owner"