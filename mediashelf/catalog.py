"""Directory listing and deletion under the configured root."""

import logging
import shutil
from datetime import datetime, timezone

from mediashelf.errors import FilesystemError, InvalidPathError
from mediashelf.models import FileEntry
from mediashelf.paths import PathConfiner

logger = logging.getLogger(__name__)


class FileCatalog:
    def __init__(self, confiner: PathConfiner) -> None:
        self.confiner = confiner

    def list_dir(self, relative: str | None) -> list[FileEntry]:
        """List a directory sorted by name.

        An empty directory yields ``[]``; a missing one raises FilesystemError
        with reason ``directory_not_found``.
        """
        directory = self.confiner.resolve(relative)
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except FileNotFoundError as e:
            raise FilesystemError(
                f"directory does not exist: {directory}",
                path=directory,
                reason="directory_not_found",
            ) from e
        except NotADirectoryError as e:
            raise FilesystemError(
                f"not a directory: {directory}", path=directory, reason="not_a_directory"
            ) from e
        except OSError as e:
            raise FilesystemError(f"error reading directory {directory}: {e}", path=directory) from e

        entries: list[FileEntry] = []
        for child in children:
            try:
                st = child.stat()
                is_dir = child.is_dir()
            except OSError as e:
                # Dangling symlinks and races with deletion.
                logger.warning("Skipping unreadable entry %s: %s", child, e)
                continue
            entries.append(
                FileEntry(
                    name=child.name,
                    path=self.confiner.to_relative(child),
                    is_directory=is_dir,
                    size=st.st_size,
                    modified_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                )
            )
        return entries

    def delete(self, relative: str | None) -> None:
        """Delete a file, or a directory recursively."""
        target = self.confiner.resolve(relative)
        if target == self.confiner.root:
            logger.warning("Refused to delete the root directory")
            raise InvalidPathError("refusing to delete the root directory", path=relative)

        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as e:
            raise FilesystemError(f"error deleting {target}: {e}", path=target) from e
        logger.info("Deleted %s", target)
