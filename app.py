import atexit
import logging

from flask import Flask
from flask_cors import CORS

import config
from controllers.game_controller import router as game_routes
from services.ai_worker import shutdown_pool

logging.basicConfig(level=config.LOG_LEVEL)


def create_app():
    app = Flask(__name__)
    CORS(app, origins=config.CORS_ORIGINS)
    app.register_blueprint(game_routes, url_prefix="/api")
    return app


app = create_app()
atexit.register(shutdown_pool)

if __name__ == "__main__":
    app.run(debug=config.FLASK_DEBUG)
