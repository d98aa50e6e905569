from hashlib import sha256


def double_sha256(data: bytes) -> bytes:
    return sha256(sha256(data).digest()).digest()


def serialize_hash(hash_str: str) -> bytes:
    """Hashes are displayed big-endian but serialized little-endian"""
    return bytes.fromhex(hash_str)[::-1]


def hash_to_int(hash_str: str) -> int:
    return int(hash_str, 16)


def get_raw_hash(data: bytes) -> str:
    """Consensus hash of the data in display form"""
    return double_sha256(data)[::-1].hex()


def hash_serialized(*hashes: str) -> str:
    """Consensus hash of the concatenated serialization of hashes"""
    return get_raw_hash(b"".join(serialize_hash(h) for h in hashes))
