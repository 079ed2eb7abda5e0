import logging

from flask import Flask, jsonify, current_app
from flask_cors import CORS

import config
from routes.auth_routes import auth_bp
from routes.users import user_bp
from routes.trip_routes import trip_bp
from routes.transportation_routes import transportation_bp
from utils.errors import TrackerError


def handle_tracker_error(error):
    if error.status_code >= 500:
        current_app.logger.error(f"{type(error).__name__}: {error.message}")
    else:
        current_app.logger.warning(f"{type(error).__name__}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


def create_app():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    app = Flask(__name__)
    CORS(app)

    app.secret_key = config.FLASK_SECRET_KEY

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(trip_bp)
    app.register_blueprint(transportation_bp)

    app.register_error_handler(TrackerError, handle_tracker_error)

    return app


app = create_app()

if __name__ == "__main__":
    app.run(host='0.0.0.0', port=config.PORT, debug=False)
