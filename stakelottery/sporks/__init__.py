from .manager import (
    ConfigSource,
    SporkManager,
    SporkMessage,
    get_active_multi_value_spork,
)
from .values import (
    LotteryTicketMinValueSporkValue,
    MultiValueSporkValue,
    spork_value_lookup,
)
