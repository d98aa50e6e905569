import os

import yaml

CONFIG_ENV_VAR = "STAKELOTTERY_CONFIG"
DEFAULT_CONFIG_FILE = "stakelottery.yaml"

# Network whose parameters are used when none is given
network = "main"

# Directory where lottery states are saved
storage_path = "storage"

log_level = "WARNING"


def load_config(path: str = None) -> dict:
    """Reads the overrides from a yaml file, if there is one"""

    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)

    if not os.path.exists(path):
        return {}

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping")

    return data


def apply_config(data: dict):
    global network, storage_path, log_level

    network = data.get("network", network)
    storage_path = data.get("storage_path", storage_path)
    log_level = data.get("log_level", log_level)
