"""Local filesystem access for a feed directory."""

import logging
from pathlib import Path
from typing import Optional


BYTES_PER_MB = 1024 * 1024

logger = logging.getLogger("podcast_sync.storage")


class LocalStorage:
    """A feed directory on the local filesystem."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def ensure_directory(self) -> Path:
        """Create the directory and its parents if needed.

        Returns:
            Path: The directory.

        Raises:
            RuntimeError: If the directory cannot be created.
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Error creating feed directory {self.directory}: {e}")
        return self.directory

    def file_exist(self, filename: str) -> bool:
        """
        Check if a file exists in the directory.

        Args:
            filename (str): The name of the file.

        Returns:
            bool: True if the file exists, False otherwise.
        """
        return (self.directory / filename).is_file()

    def files(self) -> list[Path]:
        """Regular files directly under the directory, hidden files included."""
        if not self.directory.is_dir():
            return []
        return [path for path in self.directory.iterdir() if path.is_file()]

    def files_by_age(self, newest_first: bool = False) -> list[Path]:
        """
        Visible files ordered by modification time.

        Ties are broken by name so the order is stable between runs.
        """
        files = [path for path in self.files() if not path.name.startswith(".")]
        files.sort(key=lambda path: path.name)
        files.sort(key=lambda path: path.stat().st_mtime, reverse=newest_first)
        return files

    def size_bytes(self) -> int:
        """Total size of the directory files."""
        return sum(path.stat().st_size for path in self.files())

    def size_mb(self) -> float:
        """Total size of the directory files in megabytes."""
        return self.size_bytes() / BYTES_PER_MB

    def oldest_file(self) -> Optional[Path]:
        """Least recently modified file, hidden files included."""
        files = self.files()
        if not files:
            return None
        return min(files, key=lambda path: (path.stat().st_mtime, path.name))

    def remove(self, path: Path) -> None:
        """Delete a file of the directory.

        Raises:
            OSError: If the file cannot be deleted.
        """
        path.unlink()
        logger.info(f"Removed {path}")
