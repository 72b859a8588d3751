"""Error taxonomy shared by the core and the web layer.

Each error carries the HTTP status and the short machine-readable reason the
web layer reports. The exception message itself holds the diagnostic detail
and is only ever logged.
"""

from pathlib import Path


class MediaShelfError(Exception):
    """Base class for every error the service reports to a client."""

    status_code = 500
    reason = "internal_error"
    public_message = "Internal server error"

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        if reason is not None:
            self.reason = reason


class InvalidRequestError(MediaShelfError):
    status_code = 400
    reason = "invalid_payload"
    public_message = "Invalid request payload"


class InvalidPathError(MediaShelfError):
    """Raised when a client path escapes the root or cannot be normalized."""

    status_code = 400
    reason = "invalid_path"
    public_message = "Invalid path"


class InvalidTimeFormatError(MediaShelfError):
    status_code = 400
    reason = "invalid_time_format"
    public_message = "Invalid time format"


class FilesystemError(MediaShelfError):
    """Read/write/delete/stat failure unrelated to path validation."""

    status_code = 500
    reason = "filesystem_error"
    public_message = "Filesystem operation failed"


class MediaNotFoundError(FilesystemError):
    status_code = 404
    reason = "not_found"
    public_message = "Media not found"


class ExternalToolError(MediaShelfError):
    """Raised when ffmpeg cannot be launched or exits non-zero."""

    status_code = 500
    reason = "external_tool_failed"
    public_message = "Failed to edit video"

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        cmd: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, path=path)
        self.cmd = cmd or []
        self.returncode = returncode
        self.stderr = stderr


class FFmpegNotFoundError(ExternalToolError):
    reason = "ffmpeg_not_found"
