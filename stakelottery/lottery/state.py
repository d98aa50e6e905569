from stakelottery.constants import MAX_LOTTERY_WINNERS
from stakelottery.utils import is_hash_str


class CoinstakeEntry:
    """A lottery ticket, identified by the hash of its coinstake"""

    __slots__ = ("transaction_id", "payee_script")

    def __init__(self, transaction_id: str, payee_script: bytes):
        self.transaction_id = transaction_id
        self.payee_script = payee_script

    def to_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "payee_script": self.payee_script.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict):
        if not is_hash_str(data["transaction_id"]):
            raise ValueError(f"Invalid transaction id {data['transaction_id']!r}")

        return cls(data["transaction_id"], bytes.fromhex(data["payee_script"]))

    def __eq__(self, other):
        if not isinstance(other, CoinstakeEntry):
            return NotImplemented

        return (
            self.transaction_id == other.transaction_id
            and self.payee_script == other.payee_script
        )

    def __hash__(self):
        return hash((self.transaction_id, self.payee_script))

    def __repr__(self):
        return f"CoinstakeEntry({self.transaction_id}, {self.payee_script.hex()})"


class LotteryState:
    """
    Ranked lottery winners after a block

    height: int -- height at which the winners last changed
    entries: tuple[CoinstakeEntry] -- winners, best score first
    """

    __slots__ = ("_height", "_entries")

    def __init__(self, height: int = 0, entries: tuple[CoinstakeEntry] = ()):
        entries = tuple(entries)

        if len(entries) > MAX_LOTTERY_WINNERS:
            raise ValueError(
                f"A lottery state holds at most {MAX_LOTTERY_WINNERS} entries, got {len(entries)}"
            )

        self._height = height
        self._entries = entries

    @property
    def height(self) -> int:
        return self._height

    @property
    def entries(self) -> tuple[CoinstakeEntry]:
        return self._entries

    def shallow_copy(self) -> "LotteryState":
        """New state sharing the same entries and height"""
        return LotteryState(self._height, self._entries)

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, LotteryState):
            return NotImplemented

        return self._height == other._height and self._entries == other._entries

    def __repr__(self):
        return f"LotteryState(height={self._height}, entries={len(self._entries)})"

    def to_dict(self) -> dict:
        return {
            "height": self._height,
            "entries": [e.to_dict() for e in self._entries],
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            data["height"], tuple(CoinstakeEntry.from_dict(e) for e in data["entries"])
        )
