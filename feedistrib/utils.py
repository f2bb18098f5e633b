"""Arithmetic, period and claim helpers of the fee distributor."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import OverflowError_, StdError

if TYPE_CHECKING:
    from .state import State

UINT128_MAX = 2**128 - 1
WEEK = 7 * 86400
CLAIM_LIMIT = 10
MIN_CLAIM_LIMIT = 2
DEFAULT_PERIODS_LIMIT = 20


def checked_add(a: int, b: int) -> int:
    """Add two 128-bit unsigned values, raising on overflow."""
    total = a + b
    if total > UINT128_MAX:
        raise OverflowError_("Add", a, b)
    return total


def multiply_ratio(value: int, numerator: int, denominator: int) -> int:
    """Compute ``value * numerator / denominator`` rounded down."""
    if denominator == 0:
        raise ZeroDivisionError("DivideByZero")
    result = value * numerator // denominator
    if result > UINT128_MAX:
        raise OverflowError_("MultiplyRatio", value, numerator)
    return result


def get_period(timestamp: int, epoch_start: int) -> int:
    """The number of whole weeks elapsed between ``epoch_start`` and ``timestamp``."""
    if timestamp < epoch_start:
        raise StdError("Invalid time")
    return (timestamp - epoch_start) // WEEK


def validate_address(address: str) -> str:
    """Check that ``address`` is a non-empty lower-case address and return it."""
    if address.lower() != address:
        raise StdError(f"Address {address} should be lowercase")
    if not address or address != address.strip():
        raise StdError(f"Invalid address: {address!r}")
    return address


@dataclass(frozen=True)
class LockInfo:
    """A lock held in the voting escrow; ``start`` and ``end`` are periods."""

    amount: int
    start: int
    end: int


@dataclass
class VotingEscrow:
    """Locks and per-period voting power of the escrow stakers."""

    locks: dict[str, LockInfo] = field(default_factory=dict)
    voting_power: dict[str, dict[int, int]] = field(default_factory=dict)
    epoch_start: int = 0

    def lock_info(self, user: str) -> LockInfo:
        """The lock of ``user``; raises when the user never locked."""
        try:
            return self.locks[user]
        except KeyError:
            raise StdError(f"Lock not found for {user}") from None

    def user_voting_power_at_period(self, user: str, period: int) -> int:
        """Voting power of ``user`` during ``period``."""
        return self.voting_power.get(user, {}).get(period, 0)

    def total_voting_power_at_period(self, period: int) -> int:
        """Sum of every user's voting power during ``period``."""
        return sum(powers.get(period, 0) for powers in self.voting_power.values())

    def user_voting_power_at(self, user: str, timestamp: int) -> int:
        """Voting power of ``user`` at ``timestamp``."""
        return self.user_voting_power_at_period(user, get_period(timestamp, self.epoch_start))

    def total_voting_power_at(self, timestamp: int) -> int:
        """Total voting power at ``timestamp``."""
        return self.total_voting_power_at_period(get_period(timestamp, self.epoch_start))


@dataclass(frozen=True)
class TransferMessage:
    """A token transfer to be executed on the token contract."""

    contract_addr: str
    recipient: str
    amount: int
    funds: tuple = ()

    @property
    def msg(self) -> bytes:
        """The JSON body sent to the token contract."""
        body = {"transfer": {"recipient": self.recipient, "amount": str(self.amount)}}
        return json.dumps(body, separators=(",", ":")).encode()


def transfer_token_amount(contract_addr: str, recipient: str, amount: int) -> list[TransferMessage]:
    """Messages that move ``amount`` tokens to ``recipient``; none for zero."""
    if amount == 0:
        return []
    return [TransferMessage(contract_addr, recipient, amount)]


def calculate_reward(state: State, period: int, user_vp: int, total_vp: int) -> int:
    """The share of ``period`` rewards that belongs to a user's voting power."""
    rewards = state.reward_for(period)
    try:
        return multiply_ratio(user_vp, rewards, total_vp)
    except ZeroDivisionError:
        raise StdError("DivideByZero") from None
    except OverflowError_:
        raise StdError("Overflow") from None


def calc_claim_amount(
    state: State,
    escrow: VotingEscrow,
    current_period: int,
    account: str,
    max_periods: int | None,
) -> int:
    """Rewards ``account`` can claim now; records the claim progress."""
    lock = escrow.lock_info(account)
    claim_period = state.last_claim_period(account)
    if claim_period is None:
        claim_period = lock.start
    limit = DEFAULT_PERIODS_LIMIT if max_periods is None else max_periods
    max_period = min(limit + claim_period, current_period)

    claim_amount = 0
    # The current period cannot be claimed, nor anything after the lock ends.
    while claim_period < max_period and claim_period <= lock.end:
        user_vp = escrow.user_voting_power_at_period(account, claim_period)
        total_vp = escrow.total_voting_power_at_period(claim_period)
        if user_vp and total_vp:
            reward = calculate_reward(state, claim_period, user_vp, total_vp)
            claim_amount = checked_add(claim_amount, reward)
        claim_period += 1

    state.set_last_claim_period(account, claim_period)
    return claim_amount