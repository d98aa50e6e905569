import logging
import time
from typing import Callable, Protocol

from stakelottery.utils import check_var_types

from .values import MultiValueSporkValue, spork_value_lookup


class ConfigSource(Protocol):
    """Time-windowed configuration values keyed by spork id"""

    def is_spork_active(self, spork_id: int) -> bool:
        ...

    def get_active_value(
        self, spork_id: int, height: int, timestamp: int
    ) -> MultiValueSporkValue | None:
        ...


class SporkMessage:
    def __init__(self, *, spork_id: int, value: str, time_signed: int = None):
        self.spork_id = spork_id
        self.value = value

        if time_signed is None:
            time_signed = int(time.time())

        self.time_signed = time_signed

    def to_dict(self) -> dict:
        return {
            "spork_id": self.spork_id,
            "value": self.value,
            "time_signed": self.time_signed,
        }

    @classmethod
    def from_dict(cls, data: dict):
        msg = cls(**data)

        if not all(
            check_var_types(
                (msg.spork_id, int), (msg.value, str), (msg.time_signed, int)
            )
        ):
            raise ValueError(f"Invalid spork message {data!r}")

        return msg

    def __eq__(self, other):
        if not isinstance(other, SporkMessage):
            return NotImplemented

        return self.to_dict() == other.to_dict()


def get_active_multi_value_spork(
    values: list[tuple[MultiValueSporkValue, int]], height: int, timestamp: int
) -> MultiValueSporkValue | None:
    """
    Picks the entry with the highest activation height that is
    active at the height and was signed before the timestamp
    """

    best = None
    best_key = None

    for i, (value, time_signed) in enumerate(values):
        if not value.is_valid():
            continue

        if value.activation_block_height > height or time_signed > timestamp:
            continue

        key = (value.activation_block_height, time_signed, i)

        if best_key is None or key > best_key:
            best, best_key = value, key

    return best


class SporkManager:
    """Keeps every spork message that was received, in order"""

    def __init__(
        self,
        sporks: dict[int, list[SporkMessage]] = None,
        clock: Callable[[], float] = time.time,
    ):
        if sporks is None:
            sporks = {}

        self.sporks = sporks
        self.clock = clock

    def add_spork(self, msg: SporkMessage) -> bool:
        messages = self.sporks.setdefault(msg.spork_id, [])

        if msg in messages:
            return False

        messages.append(msg)

        logging.debug(f"Added spork {msg.spork_id} with value {msg.value}")

        return True

    def get_multi_value_spork(self, spork_id: int) -> list[SporkMessage]:
        return self.sporks.get(spork_id, [])

    def is_spork_active(self, spork_id: int) -> bool:
        now = int(self.clock())

        return any(m.time_signed <= now for m in self.get_multi_value_spork(spork_id))

    def convert_multi_value_sporks(
        self, spork_id: int
    ) -> list[tuple[MultiValueSporkValue, int]]:
        values = []

        for m in self.get_multi_value_spork(spork_id):
            value = spork_value_lookup(spork_id, m.value)

            if value is None:
                continue

            values.append((value, m.time_signed))

        return values

    def get_active_value(
        self, spork_id: int, height: int, timestamp: int
    ) -> MultiValueSporkValue | None:
        values = self.convert_multi_value_sporks(spork_id)

        return get_active_multi_value_spork(values, height, timestamp)

    def to_dict(self) -> dict:
        return {
            "sporks": [m.to_dict() for msgs in self.sporks.values() for m in msgs]
        }

    @classmethod
    def from_dict(cls, data: dict, clock: Callable[[], float] = time.time):
        manager = cls(clock=clock)

        for m in data.get("sporks", []):
            manager.add_spork(SporkMessage.from_dict(m))

        return manager
