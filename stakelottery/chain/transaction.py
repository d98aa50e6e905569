import struct

from stakelottery.utils import check_var_types, get_raw_hash, is_hash_str


class TxOut:
    def __init__(self, *, value: int, script: bytes):
        self.value = value  # in smallest units
        self.script = script

    def serialize(self) -> bytes:
        return struct.pack("<qI", self.value, len(self.script)) + self.script

    def to_dict(self) -> dict:
        return {"value": self.value, "script": self.script.hex()}

    @classmethod
    def from_dict(cls, data: dict):
        return cls(value=data["value"], script=bytes.fromhex(data["script"]))

    def __eq__(self, other):
        if not isinstance(other, TxOut):
            return NotImplemented

        return self.value == other.value and self.script == other.script

    def __repr__(self):
        return f"TxOut(value={self.value}, script={self.script.hex()})"


class Transaction:
    """
    The parts of a coin mint transaction the lottery looks at

    outputs: list[TxOut] -- outputs in order, a coinstake's first output is empty
    is_coinbase: bool -- whether the transaction mints the block reward
    """

    def __init__(
        self, *, outputs: list[TxOut], is_coinbase: bool = False, hash: str = None
    ):
        self.outputs = outputs
        self.is_coinbase = is_coinbase

        if hash is None:
            hash = self.get_hash()

        self.hash = hash

    def serialize(self) -> bytes:
        data = struct.pack("<?I", self.is_coinbase, len(self.outputs))

        return data + b"".join(o.serialize() for o in self.outputs)

    def get_hash(self) -> str:
        return get_raw_hash(self.serialize())

    @property
    def coin_mint_payee(self) -> bytes:
        """Script of the output that receives the stake reward"""

        if self.is_coinbase:
            return self.outputs[0].script

        return self.outputs[1].script

    def is_well_formed(self) -> bool:
        if not all(
            check_var_types(
                (self.outputs, list),
                (self.is_coinbase, bool),
                (self.hash, str),
            )
        ):
            return False

        if not is_hash_str(self.hash):
            return False

        # Coinstakes pay out from their second output
        min_outputs = 1 if self.is_coinbase else 2

        return len(self.outputs) >= min_outputs

    def to_dict(self) -> dict:
        return {
            "outputs": [o.to_dict() for o in self.outputs],
            "is_coinbase": self.is_coinbase,
            "hash": self.hash,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            outputs=[TxOut.from_dict(o) for o in data["outputs"]],
            is_coinbase=data.get("is_coinbase", False),
            hash=data.get("hash", None),
        )
