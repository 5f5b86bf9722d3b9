"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with the user store, blueprints and error handlers.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from userapi.config import AppConfig, load_settings
from userapi.core import audit
from userapi.core.store import UserStore, create_store
from userapi.core.user_service import UserService


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None, store: Optional[UserStore] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Settings (loaded from the environment when omitted)
        store: User store (built from ``cfg`` when omitted)
    """
    cfg = cfg or load_settings()

    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.config["APP_CONFIG"] = cfg
    app.config["MAX_CONTENT_LENGTH"] = cfg.json_max_size_bytes
    app.logger.setLevel(cfg.log_level)

    # Trust X-Forwarded-* headers from proxy (nginx)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)  # type: ignore

    audit.configure(cfg.audit_log_dir, signing_key=cfg.audit_log_signing_key)

    store = store or create_store(cfg)
    app.config["USER_STORE"] = store
    app.config["USER_SERVICE"] = UserService(store, base_path=cfg.api_base_path)

    # Register blueprints
    from userapi.api import errors, health, users

    app.register_blueprint(health.bp)
    app.register_blueprint(users.bp, url_prefix=cfg.api_base_path or None)

    errors.register_error_handlers(app)

    mode_label = "DEMO" if cfg.demo_mode else "PRODUCTION"
    app.logger.info(f"Mode={mode_label}; users API registered at {cfg.api_base_path}/users")

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
