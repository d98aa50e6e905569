from typing import Protocol

from stakelottery.errors import InvariantViolation

from .block import BlockHeader


class ChainView(Protocol):
    """Read-only access to already connected blocks"""

    def get(self, height: int) -> BlockHeader | None:
        ...

    def header_at(self, height: int) -> BlockHeader:
        ...


class ActiveChain:
    """In-memory chain of headers indexed by height"""

    def __init__(self, headers: list[BlockHeader] = None):
        if headers is None:
            headers = []

        self.headers = headers

    @property
    def height(self) -> int:
        """Height of the tip, -1 when empty"""
        return len(self.headers) - 1

    @property
    def tip(self) -> BlockHeader | None:
        return self.get(self.height)

    def get(self, height: int) -> BlockHeader | None:
        if height < 0 or height > self.height:
            return None

        return self.headers[height]

    def __getitem__(self, height: int) -> BlockHeader | None:
        return self.get(height)

    def __len__(self):
        return len(self.headers)

    def header_at(self, height: int) -> BlockHeader:
        header = self.get(height)

        if header is None:
            raise InvariantViolation(
                f"Block at height {height} is not part of the active chain (tip {self.height})"
            )

        return header

    def set_tip(self, header: BlockHeader):
        if header.height != self.height + 1:
            raise ValueError(
                f"Expected block at height {self.height + 1}, got {header.height}"
            )

        self.headers.append(header)

    def pop_tip(self) -> BlockHeader:
        if not self.headers:
            raise ValueError("Cannot disconnect from an empty chain")

        return self.headers.pop()
