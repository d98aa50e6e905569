import json
import os

from stakelottery import config


def _get_storage_path(name: str):
    return os.path.join(config.storage_path, f"{name}.json")


def load_storage_file(name: str, default=None):
    path = _get_storage_path(name)

    if not os.path.exists(path):
        return default

    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} does not hold saved lottery data")

    return data


def save_storage_file(name: str, data: dict):
    """Writes the data next to the old save and swaps it in once complete"""

    path = _get_storage_path(name)
    tmp_path = f"{path}.tmp"

    os.makedirs(config.storage_path, exist_ok=True)

    with open(tmp_path, "w") as f:
        json.dump(data, f)
        f.flush()
        os.fsync(f.fileno())

    # An interrupted save leaves the previous states in place
    os.replace(tmp_path, path)
