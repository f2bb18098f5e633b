import pytest

from feedistrib.errors import OverflowError_, StdError
from feedistrib.state import State
from feedistrib.utils import (
    UINT128_MAX,
    WEEK,
    LockInfo,
    TransferMessage,
    VotingEscrow,
    calc_claim_amount,
    calculate_reward,
    checked_add,
    get_period,
    multiply_ratio,
    transfer_token_amount,
    validate_address,
)

EPOCH = 1_000_000


def test_checked_add_within_range():
    assert checked_add(100_000_000, 100_000_000) == 200_000_000


def test_checked_add_overflow():
    with pytest.raises(OverflowError_):
        checked_add(UINT128_MAX, 1)


def test_multiply_ratio():
    assert multiply_ratio(200, 100_000_000, 400) == 50_000_000
    assert multiply_ratio(1, 100_000_000, 4) == 25_000_000


def test_multiply_ratio_zero_denominator():
    with pytest.raises(ZeroDivisionError):
        multiply_ratio(1, 1, 0)


def test_multiply_ratio_overflow():
    with pytest.raises(OverflowError_):
        multiply_ratio(UINT128_MAX, 2, 1)


def test_week_is_one_period_long():
    assert get_period(EPOCH + 604800, EPOCH) == 1
    assert get_period(EPOCH + 2 * WEEK - 1, EPOCH) == 1


def test_get_period_boundaries():
    assert get_period(EPOCH, EPOCH) == 0
    assert get_period(EPOCH + WEEK - 1, EPOCH) == 0
    assert get_period(EPOCH + WEEK, EPOCH) == 1
    assert get_period(EPOCH + 104 * WEEK, EPOCH) == 104


def test_get_period_before_epoch():
    with pytest.raises(StdError) as info:
        get_period(EPOCH - 1, EPOCH)
    assert info.value.message == "Invalid time"


def test_validate_address():
    assert validate_address("user1") == "user1"
    with pytest.raises(StdError):
        validate_address("User1")
    with pytest.raises(StdError):
        validate_address("")


def test_transfer_zero_amount_has_no_messages():
    assert transfer_token_amount("token", "user1", 0) == []


def test_transfer_message_body():
    messages = transfer_token_amount("token", "user1", 100)
    assert messages == [TransferMessage("token", "user1", 100)]
    assert messages[0].msg == b'{"transfer":{"recipient":"user1","amount":"100"}}'


def test_calculate_reward_share():
    state = State()
    state.add_reward(0, 100_000_000)
    assert calculate_reward(state, 0, 1, 4) == 25_000_000
    assert calculate_reward(state, 1, 1, 4) == 0


def test_calculate_reward_zero_total():
    state = State()
    state.add_reward(0, 100_000_000)
    with pytest.raises(StdError) as info:
        calculate_reward(state, 0, 1, 0)
    assert info.value.message == "DivideByZero"


def _two_users_escrow():
    lock = LockInfo(200_000_000, 0, 104)
    powers = {period: 200 for period in range(105)}
    return VotingEscrow(
        locks={"user1": lock, "user2": lock},
        voting_power={"user1": dict(powers), "user2": dict(powers)},
    )


def _rewarded_state():
    state = State()
    state.add_reward(0, 100_000_000)
    state.add_reward(1, 100_000_000)
    return state


def test_voting_escrow_totals_and_timestamps():
    escrow = _two_users_escrow()
    escrow.epoch_start = EPOCH
    assert escrow.total_voting_power_at_period(3) == 2 * escrow.user_voting_power_at_period("user1", 3)
    assert escrow.user_voting_power_at("user1", EPOCH + WEEK) == escrow.user_voting_power_at_period("user1", 1)
    assert escrow.total_voting_power_at(EPOCH) == escrow.total_voting_power_at_period(0)
    assert escrow.user_voting_power_at_period("nobody", 0) == 0


def test_lock_info_unknown_user():
    with pytest.raises(StdError):
        VotingEscrow().lock_info("nobody")


def test_claim_max_periods_then_rest():
    state = _rewarded_state()
    escrow = _two_users_escrow()
    assert calc_claim_amount(state, escrow, 107, "user1", 1) == 50_000_000
    assert state.last_claim_period("user1") == 1
    assert calc_claim_amount(state, escrow, 107, "user1", None) == 50_000_000
    assert calc_claim_amount(state, escrow, 107, "user2", None) == 100_000_000
    assert calc_claim_amount(state, escrow, 107, "user1", None) == 0


def test_claim_excludes_current_period():
    state = _rewarded_state()
    escrow = _two_users_escrow()
    assert calc_claim_amount(state, escrow, 1, "user1", None) == 50_000_000
    assert state.last_claim_period("user1") == 1


def test_claim_stops_after_lock_end():
    state = _rewarded_state()
    escrow = _two_users_escrow()
    escrow.locks["user1"] = LockInfo(200_000_000, 0, 0)
    assert calc_claim_amount(state, escrow, 50, "user1", None) == 50_000_000
    assert state.last_claim_period("user1") == 1


def test_claim_without_rewards_is_zero():
    state = State()
    escrow = _two_users_escrow()
    assert calc_claim_amount(state, escrow, 103, "user1", None) == 0
    assert state.last_claim_period("user1") == 20