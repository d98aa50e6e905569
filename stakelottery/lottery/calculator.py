import logging
import time
from typing import Callable

from stakelottery.chain import ChainView, Transaction
from stakelottery.constants import (
    COIN,
    DEFAULT_MIN_TICKET_VALUE,
    MAX_LOTTERY_WINNERS,
    SPORK_16_LOTTERY_TICKET_MIN_VALUE,
)
from stakelottery.sporks import ConfigSource
from stakelottery.utils import hash_serialized, hash_to_int

from .schedule import CycleSchedule, check_cycle
from .state import CoinstakeEntry, LotteryState


def calculate_lottery_score(coinstake_hash: str, last_lottery_block_hash: str) -> int:
    """Deterministic score of a coinstake for the cycle anchored at a block"""
    return hash_to_int(hash_serialized(coinstake_hash, last_lottery_block_hash))


def rank_coinstakes(
    entries: list[CoinstakeEntry],
    last_lottery_block_hash: str,
    score_fn: Callable[[str, str], int] = calculate_lottery_score,
) -> tuple[bool, list[CoinstakeEntry]]:
    """
    Sorts the entries by score, best first, and cuts them down to the
    maximum amount of winners.

    The last entry is expected to be the new candidate. Returns whether
    the ranking differs from the one without the candidate, which is
    only the case if the candidate didn't end up at the very bottom of
    a full list.
    """

    # Entries with the same score keep the order they were added in
    ranked = [
        (score_fn(e.transaction_id, last_lottery_block_hash), rank, e)
        for rank, e in enumerate(entries)
    ]

    should_update = True

    if len(ranked) > 1:
        ranked = sorted(ranked, key=lambda r: r[0], reverse=True)

        should_update = ranked[-1][1] != MAX_LOTTERY_WINNERS

    if len(ranked) > MAX_LOTTERY_WINNERS:
        ranked.pop()

    return should_update, [e for _, _, e in ranked]


class LotteryWinnersCalculator:
    def __init__(
        self,
        *,
        start_of_lottery_blocks: int,
        chain: ChainView,
        sporks: ConfigSource,
        schedule: CycleSchedule,
        clock: Callable[[], float] = time.time,
        score_fn: Callable[[str, str], int] = calculate_lottery_score,
    ):
        self.start_of_lottery_blocks = start_of_lottery_blocks

        self.chain = chain
        self.sporks = sporks
        self.schedule = schedule

        # Adjusted network time, used when the block isn't connected yet
        self.clock = clock

        self.score_fn = score_fn

    def minimum_coinstake_for_ticket(self, height: int) -> int:
        """Minimum stake in coins that a coinstake needs to get a ticket"""

        if not self.sporks.is_spork_active(SPORK_16_LOTTERY_TICKET_MIN_VALUE):
            return DEFAULT_MIN_TICKET_VALUE

        header = self.chain.get(height)
        block_time = int(self.clock()) if header is None else header.timestamp

        value = self.sporks.get_active_value(
            SPORK_16_LOTTERY_TICKET_MIN_VALUE, height, block_time
        )

        if value is None or not value.is_valid():
            return DEFAULT_MIN_TICKET_VALUE

        return value.entry_ticket_value

    def get_coinstake_amount(self, tx: Transaction) -> int:
        if tx.is_coinbase:
            return tx.outputs[0].value

        # Stake rewards can be split over several outputs to the same payee
        payee = tx.outputs[1].script

        return sum(o.value for o in tx.outputs if o.script == payee)

    def is_coinstake_valid_for_lottery(self, tx: Transaction, height: int) -> bool:
        amount = self.get_coinstake_amount(tx)

        return amount > self.minimum_coinstake_for_ticket(height) * COIN

    def get_last_lottery_block_hash_before_height(self, height: int) -> str:
        cycle = check_cycle(self.schedule.get_lottery_cycle(height))

        last_lottery_height = max(
            self.start_of_lottery_blocks, cycle * ((height - 1) // cycle)
        )

        return self.chain.header_at(last_lottery_height).hash

    def update_coinstakes(
        self, last_lottery_block_hash: str, coinstakes: list[CoinstakeEntry]
    ) -> tuple[bool, list[CoinstakeEntry]]:
        return rank_coinstakes(coinstakes, last_lottery_block_hash, self.score_fn)

    def calculate_updated_lottery_winners(
        self, coin_mint_tx: Transaction | None, previous: LotteryState, height: int
    ) -> LotteryState:
        if height <= 0:
            return LotteryState()

        if self.schedule.is_lottery_block_height(height):
            logging.debug(f"Lottery block at {height}, resetting winners")
            return LotteryState(height)

        if height <= self.start_of_lottery_blocks:
            return previous.shallow_copy()

        if not self.is_coinstake_valid_for_lottery(coin_mint_tx, height):
            return previous.shallow_copy()

        last_lottery_block_hash = self.get_last_lottery_block_hash_before_height(height)

        coinstakes = [
            *previous.entries,
            CoinstakeEntry(coin_mint_tx.hash, coin_mint_tx.coin_mint_payee),
        ]

        should_update, coinstakes = self.update_coinstakes(
            last_lottery_block_hash, coinstakes
        )

        if not should_update:
            logging.debug(f"Coinstake {coin_mint_tx.hash} did not make the winners")
            return previous.shallow_copy()

        logging.debug(f"Coinstake {coin_mint_tx.hash} entered the winners at {height}")

        return LotteryState(height, coinstakes)
