from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_PAGE_SIZE
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_operator, list_tables
from .events.controller import register as register_events
from .members.controller import register as register_members
from .regions.controller import register as register_regions
from .users.controller import register as register_users

REPO_ROOT = Path(__file__).resolve().parents[2]


def register_routes(app: Flask, container: Container) -> None:
    register_users(app, container)
    register_members(app, container)
    register_regions(app, container)
    register_events(app, container)
    register_attendance(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "message": "Server is running!"}), 200


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_MB", 10)) * 1024 * 1024

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        app.logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_operator(db_config)
        app.logger.info("demo seed ready")

    container = build_container(
        db_config=db_config,
        upload_dir=str(getattr(settings, "UPLOAD_DIR", REPO_ROOT / "uploads" / "images")),
        page_size=int(getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE)),
    )
    register_routes(app, container)
    app.logger.info("settings=%s db=%s", settings_module, container.conn.describe())

    return app
