import logging
import time
from typing import Callable

from stakelottery.chain import ActiveChain, Block, BlockHeader
from stakelottery.sporks import ConfigSource
from stakelottery.utils import load_storage_file, save_storage_file

from .calculator import LotteryWinnersCalculator
from .schedule import SuperblockSchedule
from .state import CoinstakeEntry, LotteryState

INDEX_PATH = "lottery"


class LotteryWinnersIndex:
    """Keeps the lottery state of every connected block"""

    def __init__(
        self,
        *,
        schedule: SuperblockSchedule,
        sporks: ConfigSource,
        chain: ActiveChain = None,
        states: list[LotteryState] = None,
        clock: Callable[[], float] = time.time,
    ):
        if chain is None:
            chain = ActiveChain()

        if states is None:
            states = []

        if len(states) != len(chain):
            raise ValueError("Every connected block needs a lottery state")

        self.chain = chain
        self.states = states  # index is the block height

        self.calculator = LotteryWinnersCalculator(
            start_of_lottery_blocks=schedule.lottery_start_block,
            chain=chain,
            sporks=sporks,
            schedule=schedule,
            clock=clock,
        )

    @property
    def height(self) -> int:
        return self.chain.height

    @property
    def tip_state(self) -> LotteryState:
        if not self.states:
            return LotteryState()

        return self.states[-1]

    def get_state(self, height: int) -> LotteryState | None:
        if height < 0 or height > self.height:
            return None

        return self.states[height]

    def winners(self, height: int = None) -> tuple[CoinstakeEntry]:
        if height is None:
            return self.tip_state.entries

        state = self.get_state(height)

        return () if state is None else state.entries

    def connect_block(self, block: Block) -> LotteryState:
        if block.height != self.height + 1:
            raise ValueError(
                f"Expected block at height {self.height + 1}, got {block.height}"
            )

        # The state is calculated before the block is part of the chain
        state = self.calculator.calculate_updated_lottery_winners(
            block.lottery_transaction, self.tip_state, block.height
        )

        self.chain.set_tip(block.header)
        self.states.append(state)

        logging.info(f"Connected block {block.hash} at {block.height}")

        return state

    def disconnect_block(self) -> BlockHeader:
        header = self.chain.pop_tip()
        self.states.pop()

        logging.info(f"Disconnected block {header.hash} at {header.height}")

        return header

    def to_dict(self) -> dict:
        return {
            "headers": [h.to_dict() for h in self.chain.headers],
            "states": [s.to_dict() for s in self.states],
        }

    def save(self, name: str = INDEX_PATH):
        save_storage_file(name, self.to_dict())

    @classmethod
    def from_dict(cls, data: dict, **kwargs):
        chain = ActiveChain([BlockHeader.from_dict(h) for h in data["headers"]])
        states = [LotteryState.from_dict(s) for s in data["states"]]

        return cls(chain=chain, states=states, **kwargs)

    @classmethod
    def from_save(cls, name: str = INDEX_PATH, **kwargs):
        data = load_storage_file(name)

        if data is None:
            return cls(**kwargs)

        return cls.from_dict(data, **kwargs)
