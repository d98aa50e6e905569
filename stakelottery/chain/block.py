from .transaction import Transaction


class BlockHeader:
    def __init__(self, *, height: int, hash: str, timestamp: int):
        self.height = height
        self.hash = hash
        self.timestamp = timestamp

    def to_dict(self) -> dict:
        return {"height": self.height, "hash": self.hash, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict):
        return cls(**data)

    def __repr__(self):
        return f"BlockHeader(height={self.height}, hash={self.hash})"


class Block(BlockHeader):
    def __init__(
        self,
        *,
        height: int,
        hash: str,
        timestamp: int,
        transactions: list[Transaction],
        is_proof_of_stake: bool = True,
    ):
        super().__init__(height=height, hash=hash, timestamp=timestamp)

        self.transactions = transactions
        self.is_proof_of_stake = is_proof_of_stake

    @property
    def header(self) -> BlockHeader:
        return BlockHeader(height=self.height, hash=self.hash, timestamp=self.timestamp)

    @property
    def coin_mint_transaction(self) -> Transaction:
        # Proof of stake blocks keep an empty coinbase in front of the coinstake
        if self.is_proof_of_stake:
            return self.transactions[1]

        return self.transactions[0]

    @property
    def lottery_transaction(self) -> Transaction | None:
        """Coin mint transaction, or None for the genesis block"""

        if self.height <= 0:
            return None

        return self.coin_mint_transaction

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "transactions": [t.to_dict() for t in self.transactions],
            "is_proof_of_stake": self.is_proof_of_stake,
        }

    @classmethod
    def from_dict(cls, data: dict):
        return cls(
            height=data["height"],
            hash=data["hash"],
            timestamp=data["timestamp"],
            transactions=[Transaction.from_dict(t) for t in data["transactions"]],
            is_proof_of_stake=data.get("is_proof_of_stake", True),
        )
