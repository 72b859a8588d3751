"""Shared test fixtures."""

import threading
from pathlib import Path

import pytest

from mediashelf.errors import ExternalToolError
from mediashelf.paths import PathConfiner


class FakeTranscoder:
    """Records calls and writes placeholder files instead of running ffmpeg.

    ``fail_extract_at`` makes the n-th extract call (0-based) fail;
    ``fail_concat`` makes concat fail after writing a partial output.
    """

    def __init__(self, fail_extract_at: int | None = None, fail_concat: bool = False):
        self.fail_extract_at = fail_extract_at
        self.fail_concat = fail_concat
        self.extract_calls: list[tuple[Path, Path, str, int]] = []
        self.concat_calls: list[tuple[Path, Path, str]] = []
        self.temp_dirs_seen: set[Path] = set()
        self._lock = threading.Lock()

    def extract(self, input_path, output_path, start_time, duration_seconds):
        with self._lock:
            index = len(self.extract_calls)
            self.extract_calls.append((input_path, output_path, start_time, duration_seconds))
            self.temp_dirs_seen.add(output_path.parent)
        if self.fail_extract_at is not None and index == self.fail_extract_at:
            output_path.write_bytes(b"partial")
            raise ExternalToolError("ffmpeg exited with status 1", path=input_path, returncode=1)
        output_path.write_bytes(f"{input_path.name}@{start_time}+{duration_seconds}".encode())

    def concat(self, manifest_path, output_path):
        manifest = manifest_path.read_text(encoding="utf-8")
        with self._lock:
            self.concat_calls.append((manifest_path, output_path, manifest))
        if self.fail_concat:
            output_path.write_bytes(b"partial")
            raise ExternalToolError("ffmpeg exited with status 1", path=manifest_path, returncode=1)
        output_path.write_bytes(manifest.encode())


@pytest.fixture
def media_root(tmp_path) -> Path:
    root = tmp_path / "www"
    root.mkdir()
    return root


@pytest.fixture
def confiner(media_root) -> PathConfiner:
    return PathConfiner(media_root)


@pytest.fixture
def video(media_root) -> Path:
    path = media_root / "movies" / "clip.mp4"
    path.parent.mkdir()
    path.write_bytes(b"\x00" * 1024)
    return path


@pytest.fixture
def transcoder() -> FakeTranscoder:
    return FakeTranscoder()
