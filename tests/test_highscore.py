"""High score key/value file: reading, writing and degrading to zero."""
import json
import logging

from spaceshooter import HIGHSCORE_KEY, HighScoreStore


def test_missing_file_reads_as_zero(store):
    assert store.load() == 0


def test_save_then_load(store):
    store.save(120)
    assert store.load() == 120


def test_value_is_stored_as_string(store):
    store.save(42)
    with open(store.path, encoding="utf-8") as f:
        assert json.load(f) == {HIGHSCORE_KEY: "42"}


def test_save_keeps_other_entries(store):
    with open(store.path, "w", encoding="utf-8") as f:
        json.dump({"volume": "3"}, f)
    store.save(7)
    with open(store.path, encoding="utf-8") as f:
        assert json.load(f) == {"volume": "3", HIGHSCORE_KEY: "7"}


def test_corrupt_file_reads_as_zero(store):
    with open(store.path, "w", encoding="utf-8") as f:
        f.write("{not json")
    assert store.load() == 0


def test_non_numeric_value_reads_as_zero(store):
    with open(store.path, "w", encoding="utf-8") as f:
        json.dump({HIGHSCORE_KEY: "lots"}, f)
    assert store.load() == 0


def test_wrong_structure_reads_as_zero(store):
    with open(store.path, "w", encoding="utf-8") as f:
        json.dump([1, 2, 3], f)
    assert store.load() == 0


def test_unwritable_path_does_not_raise(tmp_path, caplog):
    store = HighScoreStore(str(tmp_path / "missing-dir" / "highscore.json"))
    with caplog.at_level(logging.WARNING):
        store.save(10)
    assert "Could not save high score" in caplog.text
    assert store.load() == 0
