"""Application-wide JSON error handlers."""
from flask import jsonify
from werkzeug.exceptions import HTTPException


def _error_body(status: int, message: str):
    return jsonify({"code": status, "message": message}), status


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors (unknown routes)."""
        return _error_body(404, "Resource not found")

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 Method Not Allowed errors."""
        return _error_body(405, "Method not allowed")

    @app.errorhandler(413)
    def request_too_large(error):
        """Handle payload too large errors."""
        max_size = app.config.get("MAX_CONTENT_LENGTH")
        return _error_body(413, f"Request payload exceeds maximum allowed size ({max_size} bytes)")

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error."""
        app.logger.error(f"Internal error: {error}", exc_info=True)
        return _error_body(500, "An unexpected error occurred")

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # Pass through HTTP errors
        if isinstance(error, HTTPException):
            return _error_body(error.code or 500, error.description or error.name)

        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return _error_body(500, "An unexpected error occurred")
