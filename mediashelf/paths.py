"""Root-confined translation between client paths and filesystem paths."""

import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path

from mediashelf.errors import InvalidPathError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathConfiner:
    """Maps client-relative paths onto an absolute root and back.

    ``resolve`` is the only way a client path reaches the filesystem. It works
    purely lexically and never touches the disk.
    """

    root: Path

    def __post_init__(self) -> None:
        root = Path(self.root)
        if not root.is_absolute():
            raise ValueError(f"Root must be an absolute path: {self.root}")
        object.__setattr__(self, "root", Path(os.path.normpath(root)))

    def resolve(self, relative: str | None) -> Path:
        """Return the absolute path for *relative*, or raise InvalidPathError."""
        text = (relative or "").replace("\\", "/")
        if "\x00" in text:
            logger.warning("Rejected path with NUL byte: %r", relative)
            raise InvalidPathError("path contains a NUL byte", path=relative)

        # Client paths are always relative to the root, even with a leading slash.
        normalized = posixpath.normpath(text.lstrip("/") or ".")
        if normalized == ".." or normalized.startswith("../"):
            logger.warning("Rejected path outside root: %r", relative)
            raise InvalidPathError("path escapes the root directory", path=relative)

        candidate = Path(os.path.normpath(self.root / normalized))
        try:
            candidate.relative_to(self.root)
        except ValueError:
            logger.warning("Rejected path outside root: %r -> %s", relative, candidate)
            raise InvalidPathError(
                "path escapes the root directory", path=relative
            ) from None
        return candidate

    def to_relative(self, absolute: Path | str) -> str:
        """Return the client-facing form of *absolute*; ``""`` if outside root."""
        path = Path(os.path.normpath(absolute))
        try:
            rel = path.relative_to(self.root)
        except ValueError:
            logger.error("Cannot express %s relative to root %s", path, self.root)
            return ""
        return rel.as_posix()
