"""FFmpeg subprocess helpers."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from mediashelf.errors import ExternalToolError, FFmpegNotFoundError

logger = logging.getLogger(__name__)

# Characters of stderr kept on the raised error; the full text is logged.
STDERR_TAIL = 2000


def check_ffmpeg(ffmpeg_bin: str = "ffmpeg") -> None:
    """Raise FFmpegNotFoundError if ffmpeg is not on PATH."""
    if shutil.which(ffmpeg_bin) is None:
        raise FFmpegNotFoundError(f"{ffmpeg_bin} not found on PATH")


def _run(cmd: list[str], path: Path) -> None:
    """Run an ffmpeg command; its exit status is the only success signal."""
    logger.info("Running ffmpeg command: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        logger.error("Could not launch %s: %s", cmd[0], e)
        raise ExternalToolError(
            f"failed to launch {cmd[0]}: {e}", path=path, cmd=cmd
        ) from e

    if result.returncode != 0:
        stderr = result.stderr or ""
        logger.error(
            "ffmpeg exited with status %d for %s:\n%s", result.returncode, path, stderr
        )
        raise ExternalToolError(
            f"ffmpeg exited with status {result.returncode}",
            path=path,
            cmd=cmd,
            returncode=result.returncode,
            stderr=stderr[-STDERR_TAIL:],
        )
    if result.stderr:
        logger.debug("ffmpeg output for %s:\n%s", path, result.stderr)


def extract_range(
    input_path: Path,
    output_path: Path,
    start_time: str,
    duration_seconds: int,
    ffmpeg_bin: str = "ffmpeg",
) -> Path:
    """Stream-copy *duration_seconds* of *input_path* starting at *start_time*.

    No timeout is applied; the call blocks until ffmpeg exits.
    """
    cmd = [
        ffmpeg_bin, "-y",
        "-i", str(input_path),
        "-ss", start_time,
        "-t", str(duration_seconds),
        "-c", "copy",
        str(output_path),
    ]
    _run(cmd, input_path)
    return output_path


def _quote_concat_path(path: Path) -> str:
    # The concat demuxer closes the quote, escapes, and reopens it.
    return "'" + str(path).replace("'", "'\\''") + "'"


def write_concat_manifest(segment_paths: list[Path], manifest_path: Path) -> Path:
    """Write a concat demuxer list: one ``file '<path>'`` line per clip."""
    if not segment_paths:
        raise ValueError("write_concat_manifest called with empty segment list")

    lines = [f"file {_quote_concat_path(Path(p).absolute())}" for p in segment_paths]
    manifest_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return manifest_path


def concat_files(
    manifest_path: Path, output_path: Path, ffmpeg_bin: str = "ffmpeg"
) -> Path:
    """Join the clips listed in *manifest_path* without re-encoding."""
    cmd = [
        ffmpeg_bin, "-y",
        "-f", "concat",
        "-safe", "0",
        "-i", str(manifest_path),
        "-c", "copy",
        str(output_path),
    ]
    _run(cmd, manifest_path)
    return output_path


class Transcoder(Protocol):
    """The two ffmpeg modes the segment pipeline needs."""

    def extract(
        self, input_path: Path, output_path: Path, start_time: str, duration_seconds: int
    ) -> None: ...

    def concat(self, manifest_path: Path, output_path: Path) -> None: ...


class FFmpegTranscoder:
    """Transcoder backed by the ffmpeg command line tool."""

    def __init__(self, ffmpeg_bin: str = "ffmpeg") -> None:
        self.ffmpeg_bin = ffmpeg_bin

    def extract(
        self, input_path: Path, output_path: Path, start_time: str, duration_seconds: int
    ) -> None:
        extract_range(
            input_path, output_path, start_time, duration_seconds, ffmpeg_bin=self.ffmpeg_bin
        )

    def concat(self, manifest_path: Path, output_path: Path) -> None:
        concat_files(manifest_path, output_path, ffmpeg_bin=self.ffmpeg_bin)
