import logging

from flask import Flask, jsonify
from dotenv import load_dotenv

# Model registry first: feature models import Base from here.
from app.custlookup import models  # noqa: F401
from app.custlookup.config import Settings, load_config, load_settings
from app.custlookup.db import init_db
from app.custlookup.logging_config import configure_logging
from app.custlookup.routes import bp as routes_bp
from app.custlookup.modules.customers.api import bp as customers_api_bp
from app.custlookup.modules.customers.service import CustomerLookup


def create_app(settings: Settings | None = None) -> Flask:
    """
    Application factory. Configuration is resolved once here; a missing
    DATABASE_URL raises ConfigError before the app is built.
    """
    if settings is None:
        load_dotenv()
        settings = load_settings()

    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config.from_mapping(load_config(settings))

    init_db(app, settings)

    def _dispose_engine_on_fork() -> None:
        import os
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    app.extensions["customer_lookup"] = CustomerLookup.from_app(app)

    app.register_blueprint(routes_bp)
    app.register_blueprint(customers_api_bp, url_prefix="/api")

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        # Ensure stack trace shows in logs.
        app.logger.exception("Unhandled 500: %s", getattr(e, "original_exception", e))
        return jsonify({"error": "internal_error"}), 500

    logging.getLogger(__name__).info("create_app() complete; env=%s", settings.env)

    return app
