from .calculator import (
    LotteryWinnersCalculator,
    calculate_lottery_score,
    rank_coinstakes,
)
from .index import LotteryWinnersIndex
from .schedule import CycleSchedule, SuperblockSchedule
from .state import CoinstakeEntry, LotteryState
