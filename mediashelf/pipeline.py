"""Segment pipeline: turns a VideoEditRequest into a trimmed or merged file."""

import logging
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from mediashelf import timecode
from mediashelf.errors import (
    FilesystemError,
    InvalidRequestError,
    InvalidTimeFormatError,
    MediaNotFoundError,
)
from mediashelf.ffutil import FFmpegTranscoder, Transcoder, write_concat_manifest
from mediashelf.models import EditResult, Segment, VideoEditRequest
from mediashelf.paths import PathConfiner

logger = logging.getLogger(__name__)

SINGLE_SUFFIX = "_merge.mp4"
MERGED_SUFFIX = "_merged.mp4"
TEMP_PREFIX = ".temp-"


def single_output_path(source: Path) -> Path:
    return source.with_name(source.stem + SINGLE_SUFFIX)


def merged_output_path(source: Path) -> Path:
    return source.with_name(source.stem + MERGED_SUFFIX)


def _remove_partial(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove partial output %s: %s", path, e)


@contextmanager
def scratch_dir(parent: Path, request_id: str) -> Iterator[Path]:
    """Create a request-scoped temp directory in *parent*; always removed on exit."""
    try:
        path = Path(tempfile.mkdtemp(prefix=f"{TEMP_PREFIX}{request_id}-", dir=parent))
    except OSError as e:
        raise FilesystemError(f"could not create temp directory in {parent}: {e}", path=parent) from e
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.error("Failed to clean up temp directory %s: %s", path, e)
        else:
            logger.info("Cleaned up temp directory %s", path)


class SegmentPipeline:
    """Extracts one or many segments and, for several, concatenates them.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self, confiner: PathConfiner, transcoder: Transcoder | None = None
    ) -> None:
        self.confiner = confiner
        self.transcoder = transcoder or FFmpegTranscoder()

    def run(self, request: VideoEditRequest) -> EditResult:
        """Execute *request* and return the relative path of the new file.

        Raises:
            InvalidRequestError: no segments were given.
            InvalidPathError: the source escapes the root.
            InvalidTimeFormatError: a timecode is malformed or a range is empty.
            MediaNotFoundError: the source is not an existing file.
            ExternalToolError: ffmpeg failed; nothing is left behind.
        """
        if not request.segments:
            raise InvalidRequestError("at least one segment is required")

        source = self.confiner.resolve(request.video_path)
        durations = [_checked_duration(seg) for seg in request.segments]

        if not source.is_file():
            raise MediaNotFoundError(f"source video does not exist: {source}", path=source)

        request_id = uuid.uuid4().hex[:12]
        logger.info(
            "[%s] Processing video %s with %d segment(s)",
            request_id, request.video_path, len(request.segments),
        )

        if len(request.segments) == 1:
            output = self._run_single(source, request.segments[0], durations[0])
            logger.info("[%s] Video edited successfully, output: %s", request_id, output)
        else:
            output = self._run_multi(source, request.segments, durations, request_id)
            logger.info("[%s] Video merged successfully, output: %s", request_id, output)

        return EditResult(
            output_path=output,
            relative_output=self.confiner.to_relative(output),
            segment_count=len(request.segments),
        )

    def _run_single(self, source: Path, segment: Segment, seconds: int) -> Path:
        output = single_output_path(source)
        try:
            self.transcoder.extract(source, output, segment.start_time, seconds)
        except Exception:
            _remove_partial(output)
            raise
        return output

    def _run_multi(
        self,
        source: Path,
        segments: list[Segment],
        durations: list[int],
        request_id: str,
    ) -> Path:
        output = merged_output_path(source)
        with scratch_dir(source.parent, request_id) as tmp:
            clips: list[Path] = []
            for i, (segment, seconds) in enumerate(zip(segments, durations)):
                clip = tmp / f"segment_{i}.mp4"
                logger.info(
                    "[%s] Extracting segment %d/%d (%s-%s)",
                    request_id, i + 1, len(segments), segment.start_time, segment.end_time,
                )
                self.transcoder.extract(source, clip, segment.start_time, seconds)
                clips.append(clip)

            try:
                manifest = write_concat_manifest(clips, tmp / "concat.txt")
            except OSError as e:
                raise FilesystemError(f"could not write concat manifest: {e}", path=tmp) from e
            try:
                self.transcoder.concat(manifest, output)
            except Exception:
                _remove_partial(output)
                raise
        return output


def _checked_duration(segment: Segment) -> int:
    seconds = timecode.duration(segment.start_time, segment.end_time)
    if seconds <= 0:
        raise InvalidTimeFormatError(
            f"segment {segment.start_time}-{segment.end_time} has non-positive "
            f"duration {seconds}s"
        )
    return seconds
