# debt_planner/app.py
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .api.routes import bp
from .utils.config import settings
from .utils.logging import get_logger
from .domain.errors import AppError

log = get_logger(__name__)

def create_app():
    app = Flask(__name__)

    app.register_blueprint(bp)

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        log.warning(f"AppError: {err.message}", extra={"status": err.status_code})
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        log.exception("Unhandled error")
        return jsonify({"error": "internal_error"}), 500

    return app

# For `flask --app debt_planner.app run`
app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.PORT, debug=settings.ENV == "dev")
