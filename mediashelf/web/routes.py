"""Web UI routes for MediaShelf."""

from flask import (
    Blueprint,
    abort,
    current_app,
    jsonify,
    request,
    send_from_directory,
)
from werkzeug.exceptions import MethodNotAllowed, NotFound

from mediashelf.errors import InvalidRequestError
from mediashelf.models import VideoEditRequest

bp = Blueprint("web", __name__)


@bp.route("/api/files", methods=["GET"])
def list_files():
    entries = current_app.config["CATALOG"].list_dir(request.args.get("path", "/"))
    if not entries:
        return jsonify({"error": "Directory is empty"}), 204
    return jsonify([e.to_json() for e in entries])


@bp.route("/api/files", methods=["DELETE"])
def delete_file():
    current_app.config["CATALOG"].delete(request.args.get("path", ""))
    return jsonify({"success": True})


@bp.route("/api/media", methods=["GET"])
def media_stream():
    return current_app.config["STREAMER"].stream(request.args.get("path", ""))


@bp.route("/api/edit-video", methods=["POST"])
def edit_video():
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise InvalidRequestError("request body is not valid JSON")

    edit = VideoEditRequest.from_json(payload)
    result = current_app.config["PIPELINE"].run(edit)
    return jsonify({"success": True, "output": result.relative_output})


API_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


@bp.route("/api/", defaults={"rest": ""}, methods=API_METHODS)
@bp.route("/api/<path:rest>", methods=API_METHODS)
def unknown_api(rest: str):
    # Werkzeug falls back to this rule when a known API URL gets the wrong method.
    allowed = {
        method
        for rule in current_app.url_map.iter_rules()
        if rule.rule == request.path and rule.endpoint != request.endpoint
        for method in rule.methods or ()
    }
    if allowed:
        raise MethodNotAllowed(valid_methods=sorted(allowed))
    abort(404)


@bp.route("/", defaults={"path": "index.html"})
@bp.route("/<path:path>")
def static_asset(path: str):
    static_dir = current_app.config["STATIC_DIR"]
    try:
        return send_from_directory(static_dir, path)
    except NotFound:
        # Client-side routes all resolve to the single-page entry point.
        return send_from_directory(static_dir, "index.html")
