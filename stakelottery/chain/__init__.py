from .block import Block, BlockHeader
from .transaction import Transaction, TxOut
from .view import ActiveChain, ChainView
