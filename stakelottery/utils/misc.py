from typing import Any, Type


def check_var_types(*type_pairs: tuple[Any, Type]):
    for var, _type in type_pairs:
        yield isinstance(var, _type)


def is_hash_str(value) -> bool:
    """Checks if a value is a 256 bit hash in hex form"""

    if not isinstance(value, str) or len(value) != 64:
        return False

    try:
        bytes.fromhex(value)
    except ValueError:
        return False

    return True
