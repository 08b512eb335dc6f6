"""
SheetFeed Flask server.
Serves the frontend and republishes the central Google Sheet as JSON.

Every API call fetches the sheet fresh; nothing is cached between requests.
"""

import logging
import os
from datetime import datetime, timezone

from flask import Flask, current_app, jsonify, send_from_directory
from flask_cors import CORS

from .config import Settings
from .feeds import get_projector
from .sheets import fetch_sheet

# ─── Setup ───
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("sheetfeed")


def _settings():
    return current_app.config["SHEETFEED_SETTINGS"]


def _feed_response(policy):
    """Fetch, decode and project the sheet; any failure becomes a JSON 500."""
    settings = _settings()
    try:
        log.info(f"Fetching homepage feed from central sheet ({policy})...")
        table = fetch_sheet(settings)
        result = get_projector(policy)(table)
        log.info("Homepage feed fetched successfully")
        return jsonify(result)
    except Exception as e:
        log.exception(f"Error fetching homepage feed: {e}")
        return jsonify({
            "error": "Failed to fetch homepage feed",
            "message": str(e) or type(e).__name__,
        }), 500


def create_app(settings=None):
    """Build the Flask app around one Settings object."""
    settings = settings or Settings.from_env()
    get_projector(settings.feed_policy)  # fail at startup on a bad FEED_POLICY

    # static_folder=None: the catch-all route below handles static files
    app = Flask(__name__, static_folder=None)
    app.config["SHEETFEED_SETTINGS"] = settings
    CORS(app)

    @app.route("/api/homepage-feed")
    def api_homepage_feed():
        """Return the feed in the configured layout."""
        return _feed_response(_settings().feed_policy)

    @app.route("/api/items-feed")
    def api_items_feed():
        """Return the label/content item list regardless of configuration."""
        return _feed_response("items")

    @app.route("/api/homepage-sections")
    def api_homepage_sections():
        """Return the fixed-section homepage feed regardless of configuration."""
        return _feed_response("homepage")

    @app.route("/api/status")
    def api_status():
        """Health check. Does not touch the sheet."""
        s = _settings()
        return jsonify({
            "ok": True,
            "sheetId": s.sheet_id,
            "feedPolicy": s.feed_policy,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def serve_frontend(path):
        """Serve static files; anything else gets index.html."""
        static_dir = _settings().static_dir
        if path and os.path.isfile(os.path.join(static_dir, path)):
            return send_from_directory(static_dir, path)
        return send_from_directory(static_dir, "index.html")

    return app


# ═══════════════════════════════════════
# STARTUP
# ═══════════════════════════════════════

def main():
    settings = Settings.from_env()
    app = create_app(settings)

    log.info("=" * 50)
    log.info("SheetFeed starting")
    log.info(f"Central sheet ID: {settings.sheet_id}")
    log.info(f"Feed policy: {settings.feed_policy}")
    log.info(f"Static files: {settings.static_dir}")
    log.info(f"Server: http://localhost:{settings.port}")
    log.info("To change the sheet, set the CENTRAL_SHEET_ID environment variable")
    log.info("=" * 50)

    app.run(
        host=settings.host,
        port=settings.port,
        debug=settings.debug,
        threaded=True,
    )


if __name__ == "__main__":
    main()
