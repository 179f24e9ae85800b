import logging
from pathlib import Path

import pytest

from mediasync.schemas.media import CopyTask, MediaItem, SyncOptions
from mediasync.services.executor import progress_label, run_copy_batch, run_delete_batch

LOG = logging.getLogger("executor-test")

def _item(root: Path, rel: str) -> MediaItem:
    p = root / rel
    p.mkdir(parents=True, exist_ok=True)
    (p / "movie.mkv").write_bytes(b"m" * 64)
    return MediaItem(name=p.name, full_path=str(p), relative_path=rel)

def _task(item: MediaItem, dst: Path) -> CopyTask:
    return CopyTask(item=item, target=str(item.destination_path(dst)))

def _never(prompt):
    raise AssertionError("prompt should not be shown")

def test_copy_creates_parents_and_copies_tree(tmp_path):
    src, dst = tmp_path / "src", tmp_path / "dst"
    item = _item(src, "Collection/C (2010)")
    res = run_copy_batch([_task(item, dst)], SyncOptions(assume_yes=True), log=LOG)
    assert (dst / "Collection" / "C (2010)" / "movie.mkv").read_bytes() == b"m" * 64
    assert res.done == 1 and res.total == 1 and not res.declined

def test_copy_overwrites_existing_files(tmp_path):
    src, dst = tmp_path / "src", tmp_path / "dst"
    item = _item(src, "A (2001)")
    (dst / "A (2001)").mkdir(parents=True)
    (dst / "A (2001)" / "movie.mkv").write_bytes(b"old")
    (dst / "A (2001)" / "keep.srt").write_bytes(b"subs")
    run_copy_batch([_task(item, dst)], SyncOptions(assume_yes=True), log=LOG)
    assert (dst / "A (2001)" / "movie.mkv").read_bytes() == b"m" * 64
    assert (dst / "A (2001)" / "keep.srt").exists()

def test_simulate_copy_touches_nothing(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    src, dst = tmp_path / "src", tmp_path / "dst"
    item = _item(src, "A (2001)")
    res = run_copy_batch([_task(item, dst)], SyncOptions(simulate=True), confirm=_never, log=LOG)
    assert not dst.exists()
    assert res.done == 0
    assert "[SIM] [1/1] Would copy" in caplog.text

def test_simulate_delete_touches_nothing(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    item = _item(tmp_path / "src", "A (2001)")
    run_delete_batch([item], SyncOptions(simulate=True), confirm=_never, log=LOG)
    assert Path(item.full_path).exists()
    assert "[SIM] [1/1] Would delete" in caplog.text

def test_declined_copy_skips_batch(tmp_path):
    src, dst = tmp_path / "src", tmp_path / "dst"
    item = _item(src, "A (2001)")
    prompts = []
    def no(prompt):
        prompts.append(prompt)
        return False
    res = run_copy_batch([_task(item, dst)], SyncOptions(), confirm=no, log=LOG)
    assert res.declined and res.done == 0
    assert len(prompts) == 1
    assert not dst.exists()

def test_single_prompt_for_whole_delete_batch(tmp_path):
    src = tmp_path / "src"
    items = [_item(src, "A (2001)"), _item(src, "B (2002)")]
    prompts = []
    def yes(prompt):
        prompts.append(prompt)
        return True
    res = run_delete_batch(items, SyncOptions(), confirm=yes, log=LOG)
    assert prompts == ["Delete 2 item(s)?"]
    assert res.done == 2
    assert not any(Path(it.full_path).exists() for it in items)

def test_delete_skips_children_of_removed_parent(tmp_path):
    src = tmp_path / "src"
    parent = _item(src, "A (2001)")
    child = _item(src, "A (2001)/Extras")
    res = run_delete_batch([parent, child], SyncOptions(assume_yes=True), log=LOG)
    assert res.done == 1
    assert not (src / "A (2001)").exists()

def test_copy_failure_propagates(tmp_path):
    missing = MediaItem(name="Gone (2000)", full_path=str(tmp_path / "Gone (2000)"),
                        relative_path="Gone (2000)")
    with pytest.raises(OSError):
        run_copy_batch([_task(missing, tmp_path / "dst")], SyncOptions(assume_yes=True), log=LOG)

def test_progress_size_annotation(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    src, dst = tmp_path / "src", tmp_path / "dst"
    tasks = [_task(_item(src, "A (2001)"), dst), _task(_item(src, "B (2002)"), dst)]
    res = run_copy_batch(tasks, SyncOptions(simulate=True, progress_size=True), log=LOG)
    assert res.total_bytes == 128
    assert res.bytes_processed == 128
    assert "[SIM] [2/2] (0.00 GB / 0.00 GB) Would copy" in caplog.text

def test_progress_label():
    assert progress_label(3, 10) == "[3/10]"
    assert progress_label(1, 2, 1024 ** 3, 2 * 1024 ** 3) == "[1/2] (1.00 GB / 2.00 GB)"

def test_empty_batches_do_not_prompt(tmp_path):
    assert run_copy_batch([], SyncOptions(), confirm=_never, log=LOG).total == 0
    assert run_delete_batch([], SyncOptions(), confirm=_never, log=LOG).total == 0
