"""Thin CLI entry point: configures logging and launches the web server."""

import argparse
import logging
import os
import sys
from pathlib import Path

from mediashelf.errors import FFmpegNotFoundError
from mediashelf.ffutil import FFmpegTranscoder, check_ffmpeg
from mediashelf.logging_config import DEFAULT_LOG_FILE, configure_logging

logger = logging.getLogger(__name__)

ROOT_ENV = "MEDIASHELF_ROOT"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediashelf",
        description="MediaShelf: browse, stream and trim videos in a local directory tree.",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument(
        "--root",
        type=Path,
        default=Path(os.environ.get(ROOT_ENV, "/www")),
        help=f"Absolute directory to serve (default: ${ROOT_ENV} or /www)",
    )
    serve.add_argument("--port", type=int, default=3001, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")
    serve.add_argument("--log-file", type=Path, default=DEFAULT_LOG_FILE, help="Append-only log file")
    serve.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    serve.add_argument("--ffmpeg", type=str, default="ffmpeg", help="ffmpeg executable")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if not args.root.is_absolute():
        parser.error(f"--root must be an absolute path, got {args.root}")

    configure_logging(args.log_file, args.log_level)

    try:
        check_ffmpeg(args.ffmpeg)
    except FFmpegNotFoundError as e:
        logger.warning("%s; video editing requests will fail", e)
        print(f"Warning: {e}; video editing is unavailable.", file=sys.stderr)

    from mediashelf.web import create_app
    app = create_app(args.root, transcoder=FFmpegTranscoder(args.ffmpeg))
    logger.info("Serving %s on %s:%d", args.root, args.host, args.port)
    print(f"MediaShelf web UI: http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
