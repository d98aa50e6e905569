import pytest

from stakelottery.chain import ActiveChain, Block, BlockHeader, Transaction, TxOut
from stakelottery.constants import COIN
from stakelottery.lottery import (
    CoinstakeEntry,
    LotteryState,
    LotteryWinnersCalculator,
    SuperblockSchedule,
)
from stakelottery.sporks import SporkManager

NOW = 10**9

LOTTERY_START = 10
LOTTERY_CYCLE = 100
CHAIN_LENGTH = 150


def make_hash(n: int) -> str:
    return f"{n:064x}"


def block_hash(height: int) -> str:
    return make_hash(0xB10C0000 + height)


def block_time(height: int) -> int:
    return 1000 + height * 60


def stake_tx(coins: int, payee: bytes = b"payee", extra: int = 0, hash: str = None):
    """Coinstake paying `coins` whole coins plus `extra` units to the payee"""
    outputs = [TxOut(value=0, script=b""), TxOut(value=coins * COIN + extra, script=payee)]

    return Transaction(outputs=outputs, hash=hash)


def make_block(height: int, tx: Transaction) -> Block:
    return Block(
        height=height,
        hash=block_hash(height),
        timestamp=block_time(height),
        transactions=[Transaction(outputs=[TxOut(value=0, script=b"")], is_coinbase=True), tx],
    )


def make_entries(n: int, start: int = 1) -> tuple[CoinstakeEntry]:
    return tuple(
        CoinstakeEntry(make_hash(i), f"payee{i}".encode()) for i in range(start, start + n)
    )


@pytest.fixture
def chain():
    return ActiveChain(
        [
            BlockHeader(height=h, hash=block_hash(h), timestamp=block_time(h))
            for h in range(CHAIN_LENGTH)
        ]
    )


@pytest.fixture
def sporks():
    return SporkManager(clock=lambda: NOW)


@pytest.fixture
def schedule():
    return SuperblockSchedule(lottery_start_block=LOTTERY_START, lottery_cycle=LOTTERY_CYCLE)


@pytest.fixture
def scores():
    """Mocked scores by transaction id, used through `mocked_calculator`"""
    return {}


@pytest.fixture
def calculator(chain, sporks, schedule):
    return LotteryWinnersCalculator(
        start_of_lottery_blocks=LOTTERY_START,
        chain=chain,
        sporks=sporks,
        schedule=schedule,
        clock=lambda: NOW,
    )


@pytest.fixture
def mocked_calculator(chain, sporks, schedule, scores):
    return LotteryWinnersCalculator(
        start_of_lottery_blocks=LOTTERY_START,
        chain=chain,
        sporks=sporks,
        schedule=schedule,
        clock=lambda: NOW,
        score_fn=lambda txid, seed: scores[txid],
    )


@pytest.fixture
def full_state(scores):
    """Eleven winners scored from 100 down to 5"""
    entries = make_entries(11)

    for e, s in zip(entries, [100, 90, 80, 70, 60, 50, 40, 30, 20, 10, 5]):
        scores[e.transaction_id] = s

    return LotteryState(140, entries)
