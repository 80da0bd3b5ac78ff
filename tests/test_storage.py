from pathlib import Path

import pytest

from md2png.storage.local import LocalStorage


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(base_dir=tmp_path / "store")


def test_temporary_path_is_removed_after_success(storage, tmp_path):
    with storage.temporary_path(suffix=".png", directory=tmp_path) as path:
        path.write_bytes(b"data")
        assert path.exists()
    assert not path.exists()


def test_temporary_path_is_removed_after_failure(storage, tmp_path):
    with pytest.raises(RuntimeError):
        with storage.temporary_path(suffix=".png", directory=tmp_path) as path:
            path.write_bytes(b"data")
            raise RuntimeError("boom")
    assert not path.exists()


def test_cleanup_ignores_errors(storage, tmp_path, monkeypatch):
    target = tmp_path / "locked.png"
    target.write_bytes(b"x")

    def refuse(self, missing_ok=False):
        raise PermissionError("locked")

    monkeypatch.setattr(Path, "unlink", refuse)
    storage.cleanup([target, None])


def test_promote_replaces_target(storage, tmp_path):
    source = tmp_path / "tmp.png"
    source.write_bytes(b"new")
    target = tmp_path / "out" / "final.png"
    target.parent.mkdir()
    target.write_bytes(b"old")

    assert storage.promote(source, target) == target
    assert target.read_bytes() == b"new"
    assert not source.exists()


def test_register_public_download_avoids_collisions(storage, tmp_path):
    source = tmp_path / "render.png"
    source.write_bytes(b"png")

    name = f"{tmp_path.name}.png"
    first = storage.register_public_download(source, name)
    second = storage.register_public_download(source, name)

    assert first.name == name
    assert second != first
    assert second.suffix == ".png"
    assert second.read_bytes() == b"png"
