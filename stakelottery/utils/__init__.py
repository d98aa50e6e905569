from .hashing import (
    double_sha256,
    get_raw_hash,
    hash_serialized,
    hash_to_int,
    serialize_hash,
)
from .misc import check_var_types, is_hash_str
from .storage import load_storage_file, save_storage_file
