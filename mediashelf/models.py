"""Shared data types used across MediaShelf."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from mediashelf.errors import InvalidRequestError


@dataclass(frozen=True)
class Segment:
    """A start/end pair of ``HH:MM:SS`` timecodes."""

    start_time: str
    end_time: str


@dataclass
class VideoEditRequest:
    """A source path plus the ordered segments to keep from it."""

    video_path: str
    segments: list[Segment] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "VideoEditRequest":
        """Build a request from a decoded JSON body, or raise InvalidRequestError."""
        if not isinstance(data, dict):
            raise InvalidRequestError("request body must be a JSON object")

        video_path = data.get("videoPath")
        if not isinstance(video_path, str) or not video_path:
            raise InvalidRequestError("'videoPath' must be a non-empty string")

        raw_segments = data.get("segments")
        if not isinstance(raw_segments, list) or not raw_segments:
            raise InvalidRequestError("'segments' must be a non-empty list")

        segments: list[Segment] = []
        for i, raw in enumerate(raw_segments):
            if not isinstance(raw, dict):
                raise InvalidRequestError(f"segment {i} must be an object")
            start, end = raw.get("startTime"), raw.get("endTime")
            if not isinstance(start, str) or not isinstance(end, str):
                raise InvalidRequestError(
                    f"segment {i} needs string 'startTime' and 'endTime'"
                )
            segments.append(Segment(start_time=start, end_time=end))

        return cls(video_path=video_path, segments=segments)


@dataclass
class EditResult:
    """Output of a finished edit; the file lives beside its source."""

    output_path: Path
    relative_output: str
    segment_count: int = 1


@dataclass
class FileEntry:
    """One row of a directory listing."""

    name: str
    path: str
    is_directory: bool
    size: int
    modified_time: datetime

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "isDirectory": self.is_directory,
            "size": self.size,
            "modifiedTime": self.modified_time.isoformat(),
        }
