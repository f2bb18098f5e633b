"""Persistent state of the fee distributor."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice

from .utils import checked_add


@dataclass
class Config:
    """Main parameters of the distributor."""

    owner: str
    astro_token: str
    voting_escrow_addr: str
    claim_many_limit: int
    is_claim_disabled: bool


@dataclass
class OwnershipProposal:
    """A pending request to hand the contract over to a new owner."""

    owner: str
    ttl: int


@dataclass
class State:
    """Configuration, weekly rewards and per-account claim progress."""

    config: Config | None = None
    ownership_proposal: OwnershipProposal | None = None
    _rewards: dict[int, int] = field(default_factory=dict, init=False, repr=False)
    _last_claim: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def add_reward(self, period: int, amount: int) -> int:
        """Add ``amount`` to the rewards of ``period`` and return the new total."""
        total = checked_add(self._rewards.get(period, 0), amount)
        self._rewards[period] = total
        return total

    def reward_for(self, period: int) -> int:
        """Rewards distributed in ``period``, zero when none were received."""
        return self._rewards.get(period, 0)

    def rewards_after(self, start_after: int | None, limit: int | None) -> list[int]:
        """Weekly rewards in ascending period order, after ``start_after``."""
        entries = (
            amount
            for period, amount in sorted(self._rewards.items())
            if start_after is None or period > start_after
        )
        return list(islice(entries, limit))

    def last_claim_period(self, account: str) -> int | None:
        """The first period ``account`` has not yet claimed, if it ever claimed."""
        return self._last_claim.get(account)

    def set_last_claim_period(self, account: str, period: int) -> None:
        """Record where the next claim of ``account`` starts."""
        self._last_claim[account] = period