# tests/test_blob_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktrack.storage.blob_store import FileBlobStore
from tasktrack.storage.record_store import RecordStore


def test_read_missing_key_returns_none(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path / "blobs")
    assert store.read("typesafe_db") is None
    assert (tmp_path / "blobs").is_dir()


def test_write_then_read_and_overwrite(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path)

    store.write("typesafe_db", '{"a": 1}')
    store.write("typesafe_db", '{"a": "ü"}')

    assert store.read("typesafe_db") == '{"a": "ü"}'
    assert store.path_for("typesafe_db").exists()
    assert not store.path_for("typesafe_db").with_suffix(".tmp").exists()


@pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden", "with space"])
def test_invalid_keys_are_rejected(tmp_path: Path, key: str) -> None:
    store = FileBlobStore(tmp_path)
    with pytest.raises(ValueError):
        store.read(key)


@pytest.mark.asyncio
async def test_record_store_restart_on_disk(tmp_path: Path) -> None:
    first = RecordStore(FileBlobStore(tmp_path), latency=0)
    created = await first.create_task(title="Persist me", user_id="1")

    second = RecordStore(FileBlobStore(tmp_path), latency=0)

    assert second.snapshot_source == "blob"
    assert (await second.list_tasks())[-1] == created


@pytest.mark.asyncio
async def test_undecodable_blob_file_falls_back_to_seed(tmp_path: Path) -> None:
    blobs = FileBlobStore(tmp_path)
    blobs.path_for("typesafe_db").write_bytes(b'{"tasks": [], "users": []}\xff')

    store = RecordStore(blobs, latency=0)

    assert store.snapshot_source == "recovered"
    assert [t.id for t in await store.list_tasks()] == ["1", "2"]

    # The next mutation replaces the file with valid UTF-8 JSON.
    await store.delete_task("2")
    assert RecordStore(FileBlobStore(tmp_path), latency=0).snapshot_source == "blob"
