import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


class RelayState:
    """Per-app relay objects, reachable through app.extensions['throwrelay']."""

    def __init__(self, registry, relay):
        self.registry = registry
        self.relay = relay
        self.sweeper_started = False


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    level = flask_app.config.get('LOG_LEVEL', 'INFO')
    flask_app.logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', '*')
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per app; the relay is the only writer of its occupancy
    from throwrelay.services.rooms import RelayCore, RoomRegistry
    from throwrelay.transport import SocketIOTransport
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    registry = RoomRegistry(
        retention_window=flask_app.config.get('ROOM_RETENTION_SEC', 2 * 60 * 60),
        id_length=flask_app.config.get('ROOM_ID_LENGTH', 8),
        logger=flask_app.logger,
    )
    relay = RelayCore(registry, SocketIOTransport(socketio, namespace), logger=flask_app.logger)
    flask_app.extensions['throwrelay'] = RelayState(registry, relay)

    from throwrelay.main import main
    flask_app.register_blueprint(main)

    from throwrelay.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from throwrelay.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    from throwrelay.services.rooms.scheduler import start_expiry_sweeper
    start_expiry_sweeper(flask_app, registry)

    return flask_app
