from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from arena.broadcast import SocketIOBroadcaster
    from arena.services.rooms.registry import RoomRegistry
    from arena.services.rooms.scheduler import TickScheduler
    from arena.socketio_events import SessionGateway, register_socketio_handlers

    # One registry per app, shared by the socket gateway, the game loop and HTTP routes
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    broadcaster = SocketIOBroadcaster(socketio, namespace=namespace, logger=flask_app.logger)
    registry = RoomRegistry(logger=flask_app.logger)
    gateway = SessionGateway(registry, broadcaster, logger=flask_app.logger)
    scheduler = TickScheduler(
        registry,
        broadcaster,
        logger=flask_app.logger,
        heartbeat_sec=int(flask_app.config.get('TICK_HEARTBEAT_SEC', 0)),
    )
    flask_app.extensions['room_registry'] = registry
    flask_app.extensions['session_gateway'] = gateway
    flask_app.extensions['tick_scheduler'] = scheduler

    register_socketio_handlers(socketio, gateway, namespace=namespace)

    from arena.main import main
    flask_app.register_blueprint(main)

    if flask_app.config.get('GAME_LOOP_ENABLED') and not flask_app.config.get('TESTING'):
        scheduler.start(socketio)

    return flask_app
