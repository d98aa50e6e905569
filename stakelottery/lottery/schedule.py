from typing import Protocol

from stakelottery.constants import NETWORKS
from stakelottery.errors import InvariantViolation


class CycleSchedule(Protocol):
    def get_lottery_cycle(self, height: int) -> int:
        ...

    def is_lottery_block_height(self, height: int) -> bool:
        ...


def check_cycle(cycle: int) -> int:
    if not isinstance(cycle, int) or cycle < 1:
        raise InvariantViolation(f"Lottery cycle must be a positive integer, got {cycle!r}")

    return cycle


class SuperblockSchedule:
    """Lottery superblocks happen once every cycle after the lottery starts"""

    def __init__(
        self,
        *,
        lottery_start_block: int,
        lottery_cycle: int,
        transition_height: int = None,
        legacy_lottery_cycle: int = None,
    ):
        self.lottery_start_block = lottery_start_block
        self.lottery_cycle = check_cycle(lottery_cycle)

        # Blocks before the transition use the legacy cycle
        if transition_height is not None:
            check_cycle(legacy_lottery_cycle)

        self.transition_height = transition_height
        self.legacy_lottery_cycle = legacy_lottery_cycle

    def get_lottery_cycle(self, height: int) -> int:
        if self.transition_height is not None and height < self.transition_height:
            return self.legacy_lottery_cycle

        return self.lottery_cycle

    def is_lottery_block_height(self, height: int) -> bool:
        if height < self.lottery_start_block:
            return False

        return height % self.get_lottery_cycle(height) == 0

    @classmethod
    def for_network(cls, network: str):
        params = NETWORKS.get(network, None)

        if params is None:
            raise ValueError(f"Unknown network {network}")

        return cls(**params)
