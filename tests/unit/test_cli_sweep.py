"""Unit tests for the one-off sweep CLI."""
import os
import time

from api.repositories.local import LocalFileRepository
from jsonstash.cli.sweep import main


def make_items(data_dir, ages_in_days):
    repo = LocalFileRepository(data_dir)
    for item_id, days in ages_in_days.items():
        repo.write(item_id, {"id": item_id})
        ts = time.time() - days * 24 * 3600
        os.utime(data_dir / f"{item_id}.json", (ts, ts))
    return repo


def test_sweep_deletes_old_items(tmp_path):
    repo = make_items(tmp_path / "items", {"old": 10, "new": 1})

    assert main(["--data-dir", str(repo.data_dir)]) == 0
    assert repo.list_ids() == ["new"]


def test_days_option(tmp_path):
    repo = make_items(tmp_path / "items", {"old": 10, "new": 1})

    assert main(["--data-dir", str(repo.data_dir), "--days", "20"]) == 0
    assert repo.list_ids() == ["new", "old"]


def test_dry_run(tmp_path):
    repo = make_items(tmp_path / "items", {"old": 10})

    assert main(["--data-dir", str(repo.data_dir), "--dry-run"]) == 0
    assert repo.list_ids() == ["old"]


def test_missing_data_dir(tmp_path):
    assert main(["--data-dir", str(tmp_path / "nope")]) == 1


def test_invalid_days(tmp_path):
    assert main(["--data-dir", str(tmp_path), "--days", "0"]) == 1
