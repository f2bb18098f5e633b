"""The fee distributor: weekly ASTRO rewards shared among escrow stakers."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .errors import ClaimDisabled, ClaimLimitExceeded, StdError, Unauthorized
from .state import Config, OwnershipProposal, State
from .utils import (
    CLAIM_LIMIT,
    MIN_CLAIM_LIMIT,
    TransferMessage,
    VotingEscrow,
    calc_claim_amount,
    calculate_reward,
    checked_add,
    get_period,
    transfer_token_amount,
    validate_address,
)

CONTRACT_NAME = "astroport-escrow-fee-distributor"
CONTRACT_VERSION = "1.0.0"

MAX_PROPOSAL_TTL = 1_209_600
MAX_LIMIT = 30
DEFAULT_LIMIT = 10


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def _claim_limit_error() -> StdError:
    return StdError(
        f"Accounts limit for claim operation cannot be less than {MIN_CLAIM_LIMIT} !"
    )


@dataclass
class Response:
    """Attributes and token transfers produced by an executed action."""

    attributes: list[tuple[str, str]] = field(default_factory=list)
    messages: list[TransferMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ConfigResponse:
    """The distributor configuration as returned by a query."""

    owner: str
    astro_token: str
    voting_escrow_addr: str
    claim_many_limit: int
    is_claim_disabled: bool


class FeeDistributor:
    """Receives ASTRO fees per week and lets escrow stakers claim their share."""

    def __init__(
        self,
        owner: str,
        astro_token: str,
        voting_escrow_addr: str,
        escrow: VotingEscrow,
        claim_many_limit: int | None = None,
        is_claim_disabled: bool | None = None,
        epoch_start: int = 0,
    ) -> None:
        if claim_many_limit is not None and claim_many_limit < MIN_CLAIM_LIMIT:
            raise _claim_limit_error()
        self.escrow = escrow
        self.epoch_start = epoch_start
        self.contract_version = (CONTRACT_NAME, CONTRACT_VERSION)
        self.state = State(
            config=Config(
                owner=validate_address(owner),
                astro_token=validate_address(astro_token),
                voting_escrow_addr=validate_address(voting_escrow_addr),
                claim_many_limit=CLAIM_LIMIT if claim_many_limit is None else claim_many_limit,
                is_claim_disabled=bool(is_claim_disabled),
            )
        )

    @property
    def config(self) -> Config:
        assert self.state.config is not None
        return self.state.config

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        """Undo every state change made inside the block if it raises."""
        snapshot = copy.deepcopy(self.state)
        try:
            yield
        except BaseException:
            self.state = snapshot
            raise

    def _period(self, timestamp: int) -> int:
        return get_period(timestamp, self.epoch_start)

    # Ownership

    def propose_new_owner(self, sender: str, owner: str, expires_in: int, now: int) -> Response:
        """Propose ``owner`` as the next owner, valid for ``expires_in`` seconds."""
        if sender != self.config.owner:
            raise StdError("Unauthorized")
        new_owner = validate_address(owner)
        if new_owner == self.config.owner:
            raise StdError("New owner cannot be same")
        if expires_in > MAX_PROPOSAL_TTL:
            raise StdError(f"Parameter expires_in cannot be higher than {MAX_PROPOSAL_TTL}")
        self.state.ownership_proposal = OwnershipProposal(owner=new_owner, ttl=now + expires_in)
        return Response(attributes=[("action", "propose_new_owner"), ("new_owner", new_owner)])

    def drop_ownership_proposal(self, sender: str) -> Response:
        """Remove a pending ownership proposal."""
        if sender != self.config.owner:
            raise StdError("Unauthorized")
        self.state.ownership_proposal = None
        return Response(attributes=[("action", "drop_ownership_proposal")])

    def claim_ownership(self, sender: str, now: int) -> Response:
        """Let the proposed owner take over the contract."""
        proposal = self.state.ownership_proposal
        if proposal is None:
            raise StdError("Ownership proposal not found")
        if sender != proposal.owner:
            raise StdError("Unauthorized")
        if now > proposal.ttl:
            raise StdError("Ownership proposal expired")
        self.state.ownership_proposal = None
        self.config.owner = proposal.owner
        return Response(attributes=[("action", "claim_ownership"), ("new_owner", proposal.owner)])

    # Rewards

    def receive_tokens(self, sender: str, amount: int, now: int) -> Response:
        """Book ``amount`` ASTRO sent by the token contract for the current week."""
        if sender != self.config.astro_token:
            raise Unauthorized()
        period = self._period(now)
        with self._atomic():
            self.state.add_reward(period, amount)
        return Response()

    def claim(
        self,
        sender: str,
        now: int,
        recipient: str | None = None,
        max_periods: int | None = None,
    ) -> Response:
        """Claim the rewards of ``sender`` and send them to ``recipient``."""
        config = self.config
        if config.is_claim_disabled:
            raise ClaimDisabled()
        recipient_addr = sender if recipient is None else validate_address(recipient)
        current_period = self._period(now)
        with self._atomic():
            amount = calc_claim_amount(
                self.state, self.escrow, current_period, sender, max_periods
            )
            messages = transfer_token_amount(config.astro_token, recipient_addr, amount)
        return Response(
            attributes=[
                ("action", "claim"),
                ("address", recipient_addr),
                ("amount", str(amount)),
            ],
            messages=messages,
        )

    def claim_many(self, now: int, receivers: Iterable[str]) -> Response:
        """Claim rewards for several accounts at once."""
        config = self.config
        if config.is_claim_disabled:
            raise ClaimDisabled()
        receivers = list(receivers)
        if len(receivers) > config.claim_many_limit:
            raise ClaimLimitExceeded()
        current_period = self._period(now)
        total = 0
        messages: list[TransferMessage] = []
        with self._atomic():
            for receiver in receivers:
                address = validate_address(receiver)
                amount = calc_claim_amount(self.state, self.escrow, current_period, address, None)
                if amount:
                    messages.extend(transfer_token_amount(config.astro_token, address, amount))
                    total = checked_add(total, amount)
        return Response(
            attributes=[("action", "claim_many"), ("amount", str(total))],
            messages=messages,
        )

    def update_config(
        self,
        sender: str,
        claim_many_limit: int | None = None,
        is_claim_disabled: bool | None = None,
    ) -> Response:
        """Change the claim limit and whether claiming is disabled."""
        config = copy.copy(self.config)
        if sender != config.owner:
            raise Unauthorized()
        attributes = [("action", "update_config")]
        if is_claim_disabled is not None:
            if config.is_claim_disabled == is_claim_disabled:
                raise StdError(
                    f"Parameter is_claim_disabled is already {_bool_str(config.is_claim_disabled)}!"
                )
            config.is_claim_disabled = is_claim_disabled
            attributes.append(("is_claim_disabled", _bool_str(is_claim_disabled)))
        if claim_many_limit is not None:
            if claim_many_limit < MIN_CLAIM_LIMIT:
                raise _claim_limit_error()
            config.claim_many_limit = claim_many_limit
            attributes.append(("claim_many_limit", str(claim_many_limit)))
        self.state.config = config
        return Response(attributes=attributes)

    # Queries

    def query_user_reward(self, user: str, timestamp: int) -> int:
        """Rewards ``user`` accrued in the week that holds ``timestamp``."""
        user_vp = self.escrow.user_voting_power_at(user, timestamp)
        total_vp = self.escrow.total_voting_power_at(timestamp)
        if not total_vp:
            return 0
        return calculate_reward(self.state, self._period(timestamp), user_vp, total_vp)

    def query_config(self) -> ConfigResponse:
        """The current configuration."""
        config = self.config
        return ConfigResponse(
            owner=config.owner,
            astro_token=config.astro_token,
            voting_escrow_addr=config.voting_escrow_addr,
            claim_many_limit=config.claim_many_limit,
            is_claim_disabled=config.is_claim_disabled,
        )

    def query_available_reward_per_week(
        self, start_after: int | None = None, limit: int | None = None
    ) -> list[int]:
        """Weekly reward totals in ascending order, after the week of ``start_after``."""
        count = min(DEFAULT_LIMIT if limit is None else limit, MAX_LIMIT)
        start = None if start_after is None else self._period(start_after)
        return self.state.rewards_after(start, count)