"""Flask API application."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from sisyphus.api.player_routes import player_bp
from sisyphus.api.push_routes import push_bp
from sisyphus.api.service_config import ServiceConfig
from sisyphus.api.services import EXTENSION_KEY, Services
from sisyphus.api.stats_routes import stats_bp
from sisyphus.config import DEFAULT_PORT
from sisyphus.errors import RateLimitedError, SisyphusError


def create_app(config: Optional[ServiceConfig] = None, clock: Optional[Callable[[], float]] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Service configuration, environment defaults when omitted
        clock: Optional millisecond clock for the push rate limiter

    Returns:
        Configured Flask app with its database schema in place
    """
    config = config or ServiceConfig()
    logging.basicConfig(level=config.log_level, format='[%(name)-19s - %(levelname)5s] %(message)s')

    app = Flask("flask.sisyphus")
    app.extensions[EXTENSION_KEY] = Services(config, clock=clock)

    app.register_blueprint(player_bp)
    app.register_blueprint(push_bp)
    app.register_blueprint(stats_bp)

    @app.before_request
    def log_request_info():
        app.logger.info('Access to: %s from %s (%s)',
            request.url,
            request.headers.get('X-Forwarded-For', request.remote_addr),
            request.headers.get('User-Agent'))

    @app.errorhandler(SisyphusError)
    def handle_game_error(e: SisyphusError):
        """Return the error code clients branch on."""
        if isinstance(e, RateLimitedError):
            app.logger.warning(f"{request.path}: {e}")
        elif e.status_code == 409:
            app.logger.info(f"{request.path}: {e}")
        else:
            app.logger.debug(f"{request.path}: {e}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        """Return JSON instead of HTML for HTTP errors in API routes."""
        if request.path.startswith("/api/"):
            response = e.get_response()
            response.data = jsonify(
                {
                    "error": e.name.lower().replace(" ", "_"),
                    "code": e.code,
                    "message": e.description,
                }
            ).data
            response.content_type = "application/json"
            return response
        return e

    @app.errorhandler(Exception)
    def handle_internal_error(e: Exception):
        """Handle unexpected errors."""
        app.logger.error(f"Internal server error: {e}", exc_info=True)
        return jsonify({"error": "internal_error", "message": "An unexpected error occurred"}), 500

    @app.route("/api/health", methods=["GET"])
    def health():
        """Health check."""
        return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})

    return app


def main() -> None:
    """Run the development server."""
    create_app().run(port=DEFAULT_PORT)


if __name__ == "__main__":
    main()
