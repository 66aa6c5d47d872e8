"""Flask collection service: photo listing, admin writes and upload serving."""

from __future__ import annotations

from functools import wraps
from pathlib import Path

from flask import Flask, jsonify, redirect, request, send_from_directory
from loguru import logger

from infrastructure.utils import millis_id, utc_timestamp_iso
from server.config import ServerConfig
from server.imaging import ImagingError, extract_exif, optimize_image
from server.store import JsonPhotoStore

AUTH_COOKIE = "is_admin"


def create_app(config: ServerConfig | None = None) -> Flask:
    """Build the service around `config` (environment defaults when None)."""
    config = config or ServerConfig.from_env()
    store = JsonPhotoStore(config.db_path)
    uploads_dir = Path(config.uploads_dir).resolve()
    uploads_dir.mkdir(parents=True, exist_ok=True)
    public_dir = Path(config.public_dir).resolve()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_mb * 1024 * 1024
    app.config["FOLIO"] = config

    def is_admin() -> bool:
        return request.cookies.get(AUTH_COOKIE) == "true"

    def require_auth(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not is_admin():
                logger.warning("Unauthorized {} {}", request.method, request.path)
                return jsonify({"error": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    @app.post("/api/login")
    def login():
        payload = request.get_json(silent=True) or {}
        if payload.get("password") == config.admin_password:
            response = jsonify({"success": True})
            response.set_cookie(AUTH_COOKIE, "true", httponly=True)
            return response
        logger.warning("Rejected admin login from {}", request.remote_addr)
        return jsonify({"error": "Wrong password"}), 401

    @app.get("/admin", strict_slashes=False)
    @app.get("/admin/<path:filename>")
    def admin_page(filename: str = "index.html"):
        if not is_admin():
            return redirect("/login.html")
        return send_from_directory(public_dir / "admin", filename)

    @app.get("/api/photos")
    def list_photos():
        return jsonify(store.newest_first())

    @app.post("/api/photos")
    @require_auth
    def upload_photo():
        upload = request.files.get("photo")
        if upload is None or not upload.filename:
            return jsonify({"error": "No file uploaded"}), 400
        data = upload.read()

        try:
            exif = extract_exif(data)
        except ImagingError as ex:
            logger.warning("EXIF extraction failed (continuing upload): {}", ex)
            exif = {}

        stamp = millis_id()
        filename = f"opt_{stamp}.jpg"
        try:
            optimize_image(data, uploads_dir / filename)
        except ImagingError as ex:
            logger.error("Processing error for {}: {}", upload.filename, ex)
            return jsonify({"error": "Image processing failed"}), 500

        record = {
            "id": stamp,
            "url": f"/uploads/{filename}",
            "category": request.form.get("category") or "nature",
            "title": request.form.get("title") or "Untitled",
            "series": request.form.get("series") or "",
            "date": utc_timestamp_iso(),
            "exif": exif,
        }
        store.append(record)
        logger.info("Stored photo {} ({})", record["id"], record["title"])
        return jsonify(record), 201

    @app.put("/api/photos/<photo_id>")
    @require_auth
    def update_photo(photo_id: str):
        payload = request.get_json(silent=True) or {}
        changes = {key: payload.get(key) for key in ("title", "category", "series")}
        record = store.update(photo_id, changes)
        if record is None:
            return jsonify({"error": "Photo not found"}), 404
        return jsonify(record)

    @app.delete("/api/photos/<photo_id>")
    @require_auth
    def delete_photo(photo_id: str):
        record = store.remove(photo_id)
        if record is None:
            return jsonify({"error": "Photo not found"}), 404
        name = Path(str(record.get("url", ""))).name
        target = uploads_dir / name
        if name and target.is_file():
            target.unlink()
        logger.info("Deleted photo {}", photo_id)
        return jsonify({"message": "Photo deleted successfully"})

    @app.get("/uploads/<path:filename>")
    def serve_upload(filename: str):
        return send_from_directory(uploads_dir, filename)

    @app.get("/")
    @app.get("/<path:filename>")
    def serve_public(filename: str = "index.html"):
        return send_from_directory(public_dir, filename)

    return app
