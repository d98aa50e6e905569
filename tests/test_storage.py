import os

import pytest

from stakelottery import config
from stakelottery.utils import load_storage_file, save_storage_file


@pytest.fixture(autouse=True)
def storage_path(monkeypatch, tmp_path):
    path = tmp_path / "storage"
    monkeypatch.setattr(config, "storage_path", str(path))

    return path


def test_missing_file_gives_default():
    assert load_storage_file("lottery") is None
    assert load_storage_file("lottery", default={}) == {}


def test_save_replaces_previous(storage_path):
    save_storage_file("lottery", {"states": [1]})
    save_storage_file("lottery", {"states": [1, 2]})

    assert load_storage_file("lottery") == {"states": [1, 2]}
    assert os.listdir(storage_path) == ["lottery.json"]


def test_rejects_foreign_data(storage_path):
    os.makedirs(storage_path)
    (storage_path / "lottery.json").write_text("[1, 2, 3]")

    with pytest.raises(ValueError):
        load_storage_file("lottery")
