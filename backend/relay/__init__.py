from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

# always_connect: the CONNECT packet goes out before the connect handler runs,
# so a refused client still receives the error_message sent ahead of the refusal
socketio = SocketIO(async_mode=None, always_connect=True)


def _allowed_origins(value):
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Process-wide room and rate limit state, one instance per app
    from relay.services.rooms import RoomRegistry, SlidingWindowLimiter
    flask_app.extensions['relay'] = {
        'rooms': RoomRegistry(
            max_rooms=flask_app.config['MAX_ROOMS'],
            grace_period=flask_app.config['ROOM_GRACE_PERIOD_SEC'],
            max_code_attempts=flask_app.config['ROOM_CODE_MAX_ATTEMPTS'],
        ),
        'socket_limiter': SlidingWindowLimiter(
            flask_app.config['SOCKET_RATE_MAX'],
            flask_app.config['SOCKET_RATE_WINDOW_SEC'],
        ),
        'http_limiter': SlidingWindowLimiter(
            flask_app.config['HTTP_RATE_MAX'],
            flask_app.config['HTTP_RATE_WINDOW_SEC'],
        ),
    }

    from relay.security import init_security
    init_security(flask_app)

    from relay.routes import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers on the initialized socketio instance
    from relay.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    from relay.services.rooms.maintenance import start_maintenance
    start_maintenance(flask_app)

    return flask_app
