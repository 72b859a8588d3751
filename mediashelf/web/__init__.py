"""Flask application factory for the MediaShelf web UI."""

import logging
from pathlib import Path

from flask import Flask, jsonify, request

from mediashelf.catalog import FileCatalog
from mediashelf.errors import MediaShelfError
from mediashelf.ffutil import Transcoder
from mediashelf.paths import PathConfiner
from mediashelf.pipeline import SegmentPipeline
from mediashelf.streaming import MediaStreamer

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def create_app(
    root: str | Path,
    *,
    transcoder: Transcoder | None = None,
    static_dir: Path | None = None,
) -> Flask:
    """Build the app serving *root*, which must be an absolute directory path."""
    confiner = PathConfiner(Path(root))

    app = Flask(__name__, static_folder=None)
    app.config["ROOT"] = confiner.root
    app.config["STATIC_DIR"] = Path(static_dir or STATIC_DIR)
    app.config["CATALOG"] = FileCatalog(confiner)
    app.config["STREAMER"] = MediaStreamer(confiner)
    app.config["PIPELINE"] = SegmentPipeline(confiner, transcoder)

    from mediashelf.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(MediaShelfError)
    def handle_mediashelf_error(error: MediaShelfError):
        if error.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, error, exc_info=error)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.path, error)
        body = {"error": error.public_message, "reason": error.reason}
        return jsonify(body), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found", "reason": "not_found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        body = {"error": "Method not allowed", "reason": "method_not_allowed"}
        return jsonify(body), 405, {"Allow": ", ".join(error.valid_methods or [])}

    return app
