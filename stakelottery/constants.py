# Currency details
COIN = 100_000_000  # smallest units per coin

# Lottery
MAX_LOTTERY_WINNERS = 11  # maximum amount of coinstakes tracked per cycle
DEFAULT_MIN_TICKET_VALUE = 10_000  # in coins, not in smallest units

# Sporks
SPORK_16_LOTTERY_TICKET_MIN_VALUE = 10015
MULTI_VALUE_SPORK_SEPARATOR = ";"

# Network parameters
NETWORKS = {
    "main": {
        "lottery_start_block": 101,
        "lottery_cycle": 60 * 24 * 7,  # one week of one minute blocks
        "transition_height": None,
        "legacy_lottery_cycle": None,
    },
    "test": {
        "lottery_start_block": 101,
        "lottery_cycle": 200,
        "transition_height": None,
        "legacy_lottery_cycle": None,
    },
    "regtest": {
        "lottery_start_block": 101,
        "lottery_cycle": 10,
        "transition_height": None,
        "legacy_lottery_cycle": None,
    },
}
