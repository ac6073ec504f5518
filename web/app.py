"""
Flask web server for Trend Radar.

Routes
──────
GET  /                            Welcome text
GET  /api/report?month=Jan        Full dashboard report (JSON)
GET  /api/topics/top?limit=5      Top topics across all sources (JSON)
GET  /api/topics/classification   High-demand and untapped topics (JSON)
GET  /api/overlap                 Per-platform overlap with newsroom topics (JSON)
GET  /api/engagement?month=Jan    Per-platform activity for a month (JSON)
GET  /api/newsroom                Topic counts from other newsrooms (JSON)
POST /signup                      Register a user
POST /login                       Verify a user's credentials
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

# Allow running as `python web/app.py` from the project root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

load_dotenv()

from config.settings import Settings
from core import users
from core.dashboard import build_report, classification, influence, top_topics
from core.dataset import load_dataset
from core.engagement import newsroom_topic_counts, platform_engagement
from core.models import Dataset
from core.normalizer import normalize

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    dataset: Optional[Dataset] = None,
) -> Flask:
    """Build the Flask app around one read-only dataset snapshot.

    Args:
        settings: Configuration; read from the environment when omitted.
        dataset: Dataset to serve; loaded from ``settings.dataset_path`` (or
            the default path) when omitted.
    """
    settings = settings or Settings()
    settings.validate()
    if dataset is None:
        dataset = load_dataset(settings.dataset_path or None)

    app = Flask(__name__)
    users.init_db()

    # ── UI ─────────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        return "Trend Radar API: see /api/report"

    # ── Dashboard API ──────────────────────────────────────────────────────

    @app.route("/api/report")
    def report():
        """Return every dashboard view in one payload."""
        result = build_report(dataset, settings, month=request.args.get("month"))
        return jsonify(result.model_dump())

    @app.route("/api/topics/top")
    def top():
        """Return the top topics; ``limit`` defaults to ``TOP_N``."""
        raw = request.args.get("limit", str(settings.top_n))
        try:
            limit = int(raw)
        except ValueError:
            return jsonify({"error": "limit must be an integer"}), 400
        if limit < 0:
            return jsonify({"error": "limit must not be negative"}), 400

        topics = top_topics(normalize(dataset), limit)
        return jsonify([t.model_dump() for t in topics])

    @app.route("/api/topics/classification")
    def topic_classification():
        result = classification(dataset, normalize(dataset), settings)
        return jsonify(result.model_dump())

    @app.route("/api/overlap")
    def overlap():
        return jsonify([r.model_dump() for r in influence(dataset, settings)])

    @app.route("/api/engagement")
    def engagement():
        rows = platform_engagement(
            dataset,
            request.args.get("month"),
            title=settings.engagement_graph_title,
        )
        return jsonify([r.model_dump() for r in rows])

    @app.route("/api/newsroom")
    def newsroom():
        rows = newsroom_topic_counts(dataset, title=settings.newsroom_graph_title)
        return jsonify([r.model_dump() for r in rows])

    # ── Auth API ───────────────────────────────────────────────────────────

    @app.route("/signup", methods=["POST"])
    def signup():
        """Register a user from a ``{"username", "password"}`` JSON body."""
        body = request.get_json(silent=True) or {}
        try:
            user_id = users.register_user(body.get("username", ""), body.get("password", ""))
        except ValueError as exc:
            return jsonify({"message": str(exc)}), 400
        except users.DuplicateUsernameError:
            return jsonify({"message": "Username already taken"}), 400
        return jsonify({"message": "User registered successfully", "id": user_id}), 201

    @app.route("/login", methods=["POST"])
    def login():
        body = request.get_json(silent=True) or {}
        try:
            users.verify_credentials(body.get("username", ""), body.get("password", ""))
        except users.InvalidCredentialsError:
            return jsonify({"message": "Invalid username or password"}), 400
        return jsonify({"message": "Login successful"})

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error on %s", request.path)
        return jsonify({"error": "Server error"}), 500

    return app


# ── Entry point ────────────────────────────────────────────────────────────

if __name__ == "__main__":
    settings = Settings()
    create_app(settings).run(debug=settings.debug, host="0.0.0.0", port=settings.port)
