# feedistrib

A fee distributor for stakers who lock tokens in a voting escrow. Fees arrive
during a weekly period and are booked against that period. Each staker can
then claim a share of every past period, in proportion to their voting power
in that period.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Concepts

- **Period**: a whole week counted from an epoch start.
  `feedistrib.utils.get_period(timestamp, epoch_start)` turns a timestamp into
  a period number and raises `StdError("Invalid time")` for a timestamp before
  the epoch start. `feedistrib.utils.WEEK` is the length of a week in seconds.
- **Voting escrow**: `feedistrib.utils.VotingEscrow` is a table of locks
  (`LockInfo(amount, start, end)`, with `start` and `end` as periods) and of
  each user's voting power per period. It answers `lock_info`,
  `user_voting_power_at_period`, `total_voting_power_at_period`,
  `user_voting_power_at` and `total_voting_power_at`. The total is the sum of
  every user's power in that period.
- **State**: `feedistrib.state.State` holds the `Config`, any pending
  `OwnershipProposal`, the reward total of each week and, for each account,
  the first period it has not yet claimed.

## Usage

```python
from feedistrib.contract import FeeDistributor
from feedistrib.utils import WEEK, LockInfo, VotingEscrow

escrow = VotingEscrow(
    locks={
        "user1": LockInfo(amount=100, start=0, end=10),
        "user2": LockInfo(amount=300, start=0, end=10),
    },
    voting_power={"user1": {0: 100}, "user2": {0: 300}},
)
distributor = FeeDistributor(
    owner="owner",
    astro_token="token",
    voting_escrow_addr="voting_escrow",
    escrow=escrow,
)

config = distributor.query_config()
assert config.claim_many_limit == 10
assert config.is_claim_disabled is False

# Only the token address may book fees; they go to the week that holds `now`.
distributor.receive_tokens(sender="token", amount=100_000_000, now=0)

# A week later user1 can claim a quarter of week 0.
response = distributor.claim(sender="user1", now=WEEK)
assert response.attributes == [
    ("action", "claim"),
    ("address", "user1"),
    ("amount", "25000000"),
]
message = response.messages[0]
assert (message.recipient, message.amount) == ("user1", 25_000_000)
```

`FeeDistributor` takes optional `claim_many_limit` (default 10, at least 2),
`is_claim_disabled` (default false) and `epoch_start` (default 0). Addresses
must be non-empty, lower case and free of surrounding whitespace.

A claim starts at the account's last claimed period, or at the start of its
lock the first time. It covers at most `max_periods` periods (20 when not
given), never the current period and nothing after the lock ends. Periods in
which either the user's or the total voting power is zero pay nothing. The
claimed amount goes to `recipient`, or to the sender when none is given. A
zero amount produces no transfer message.

`claim_many(now, receivers)` claims for up to `claim_many_limit` accounts at
once and sends each account its own share.

The owner changes settings with `update_config(sender, claim_many_limit,
is_claim_disabled)`. It fails when `is_claim_disabled` already has the
requested value. The owner passes the contract on with
`propose_new_owner(sender, owner, expires_in, now)`, where `expires_in` is at
most 1,209,600 seconds. The proposal can be removed with
`drop_ownership_proposal(sender)`. The proposed owner takes over with
`claim_ownership(sender, now)` before the proposal expires.

Every action returns a `Response` with `attributes` and `messages`. A failing
action leaves the state as it was.

Queries:

- `query_config()` returns a `ConfigResponse`.
- `query_available_reward_per_week(start_after, limit)` lists weekly reward
  totals in ascending order of period. `start_after` is a timestamp; only
  weeks after the one that holds it are listed. It returns 10 entries by
  default and at most 30.
- `query_user_reward(user, timestamp)` returns the user's share of the rewards
  for the week that holds the timestamp, or 0 when the total voting power is
  zero.

## Errors

Failures raise a subclass of `feedistrib.errors.ContractError`:

- `Unauthorized`
- `ClaimLimitExceeded`
- `ClaimDisabled`
- `StdError` for generic failures, such as an invalid address, invalid time,
  a missing lock or a failed ownership step
- `OverflowError_` when a value passes the 128-bit unsigned range

`feedistrib.utils.multiply_ratio` raises `ZeroDivisionError` for a zero
denominator. `calculate_reward` reports that case as a `StdError`.

## What this package does not do

- It does not run a voting escrow. Locks and voting power are data you put
  into `VotingEscrow`. Nothing here creates locks or computes how voting power
  decays over time.
- It does not hold or move tokens. Transfers come back as `TransferMessage`
  values (with a JSON `msg` body) for the caller to carry out.
- State lives in memory only. There is no storage, network service or
  command-line tool.