"""Range-capable media responses for files under the root."""

from pathlib import Path

from flask import Response, send_file

from mediashelf.errors import FilesystemError, MediaNotFoundError
from mediashelf.paths import PathConfiner

CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


class MediaStreamer:
    def __init__(self, confiner: PathConfiner) -> None:
        self.confiner = confiner

    def stream(self, relative: str | None) -> Response:
        """Serve the file at *relative*, honouring ``Range`` requests."""
        path = self.confiner.resolve(relative)
        if not path.is_file():
            raise MediaNotFoundError(f"media not found: {path}", path=path)

        try:
            return send_file(
                path,
                mimetype=content_type(path),
                conditional=True,
                download_name=path.name,
            )
        except OSError as e:
            raise FilesystemError(f"error opening media file {path}: {e}", path=path) from e
