from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config
from countdown.services.timer import SharedTimer

socketio = SocketIO(async_mode=None)
# The one countdown shared by every connected client
timer = SharedTimer()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)
    timer.init_app(flask_app)

    from countdown.main import main
    flask_app.register_blueprint(main)

    # Importing here ensures the handlers bind to the initialized socketio instance
    from countdown.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app
