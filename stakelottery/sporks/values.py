from stakelottery.constants import (
    MULTI_VALUE_SPORK_SEPARATOR,
    SPORK_16_LOTTERY_TICKET_MIN_VALUE,
)


class MultiValueSporkValue:
    """
    spork_id: int -- Identifier of the spork the value belongs to
    fields: tuple[str] -- Names of the fields in the order they are written
    """

    spork_id: int = ...
    fields: tuple[str] = ...

    def __init__(self, *, activation_block_height: int = 0):
        self.activation_block_height = activation_block_height

    def is_valid(self) -> bool:
        return self.activation_block_height > 0

    def to_str(self) -> str:
        return MULTI_VALUE_SPORK_SEPARATOR.join(
            str(getattr(self, f)) for f in self.fields
        )

    @classmethod
    def from_str(cls, raw: str):
        """Parses a spork value, returning an invalid value if it is malformed"""

        parts = raw.split(MULTI_VALUE_SPORK_SEPARATOR)

        if len(parts) != len(cls.fields):
            return cls()

        try:
            data = {f: int(p) for f, p in zip(cls.fields, parts)}
        except ValueError:
            return cls()

        return cls(**data)


class LotteryTicketMinValueSporkValue(MultiValueSporkValue):
    spork_id = SPORK_16_LOTTERY_TICKET_MIN_VALUE
    fields = ("entry_ticket_value", "activation_block_height")

    def __init__(self, *, entry_ticket_value: int = 0, activation_block_height: int = 0):
        super().__init__(activation_block_height=activation_block_height)

        # Value is in coins, not in smallest units
        self.entry_ticket_value = entry_ticket_value

    def is_valid(self) -> bool:
        return self.entry_ticket_value > 0 and super().is_valid()


def generate_spork_value_lookup(value_types: tuple[type[MultiValueSporkValue]]):
    lookup = {c.spork_id: c for c in value_types}

    def spork_value_lookup(spork_id: int, raw: str) -> MultiValueSporkValue | None:
        value_cls = lookup.get(spork_id, None)

        if value_cls is None:
            return None

        return value_cls.from_str(raw)

    return spork_value_lookup


# All the multi value spork types
spork_value_types = (LotteryTicketMinValueSporkValue,)

spork_value_lookup = generate_spork_value_lookup(spork_value_types)
