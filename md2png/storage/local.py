import contextlib
import os
import shutil
from pathlib import Path
from typing import Iterable, Iterator, Optional
from uuid import uuid4

from md2png.core.config import get_settings


class LocalStorage:
    """Local file handling for temporary render artifacts and downloadable results."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        settings = get_settings()
        self.base_dir = Path(base_dir or settings.storage_dir)
        self.temp_dir = settings.temp_dir
        self.download_root = settings.public_dir / "downloads"

        for directory in (self.base_dir, self.temp_dir, self.download_root):
            directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _generate_filename(suffix: str) -> str:
        suffix = suffix if suffix.startswith(".") else f".{suffix.lstrip('.')}"
        return f"{uuid4().hex}{suffix}"

    @contextlib.contextmanager
    def temporary_path(self, *, suffix: str, directory: Optional[Path] = None) -> Iterator[Path]:
        """Yield a fresh path that is removed on exit, whatever happens inside the block."""
        directory = directory or self.temp_dir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f".md2png.{self._generate_filename(suffix)}"
        try:
            yield path
        finally:
            self.cleanup([path])

    @staticmethod
    def promote(source: Path, target: Path) -> Path:
        """Move a finished artifact into its final location in one step."""
        target.parent.mkdir(parents=True, exist_ok=True)
        os.replace(source, target)
        return target

    def save_bytes(self, data: bytes, *, suffix: str, directory: Optional[Path] = None) -> Path:
        directory = directory or self.base_dir
        target_path = directory / self._generate_filename(suffix)
        target_path.write_bytes(data)
        return target_path

    def register_public_download(self, source: Path, original_name: str) -> Path:
        target = self.download_root / Path(original_name).name
        if target.exists():
            target = self.download_root / f"{target.stem}-{uuid4().hex[:6]}{target.suffix}"
        shutil.copy2(source, target)
        return target

    @staticmethod
    def cleanup(paths: Iterable[Path]) -> None:
        # Leftover temp files never affect the output, so failures are ignored.
        for path in paths:
            if not path:
                continue
            with contextlib.suppress(OSError):
                path.unlink(missing_ok=True)
