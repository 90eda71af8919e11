from typing import Callable, Dict, Optional

from flask import current_app, request
from flask_socketio import emit

from relay import socketio
from relay.models import BLACK, WHITE, RoomError
from relay.services.rooms import RoomRegistry, client_address
from relay.services.rooms.validation import is_valid_move, is_valid_promotion, is_valid_room_code

RATE_LIMIT_MESSAGE = 'Too many connections. Try again later.'

# Events relayed verbatim to the opponent, with the shape check each must pass.
# None means the event carries no payload and nothing is forwarded but its name.
RELAY_EVENTS: Dict[str, Optional[Callable[[object], bool]]] = {
    'move': is_valid_move,
    'promotion': is_valid_promotion,
    'new_game_request': None,
    'new_game_accept': None,
}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _rooms() -> RoomRegistry:
    return current_app.extensions['relay']['rooms']


def handle_connect(auth=None):
    """Admit or refuse a new connection based on its address's recent rate."""
    limiter = current_app.extensions['relay']['socket_limiter']
    addr = client_address(request, current_app.config.get('TRUST_X_FORWARDED_FOR', True))
    if not limiter.is_allowed(addr):
        current_app.logger.warning(f"[rate-limit] addr={addr} sid={_get_sid()}")
        emit('error_message', {'message': RATE_LIMIT_MESSAGE})
        # Refusing after CONNECT was sent makes the server disconnect the client
        return False
    current_app.logger.debug(f"[connect] sid={_get_sid()} addr={addr}")


def handle_create_room(data=None):
    sid = _get_sid()
    try:
        code = _rooms().create(sid)
    except RoomError as exc:
        current_app.logger.info(f"[create-refused] sid={sid} reason={type(exc).__name__}")
        emit('join_error', {'message': exc.message})
        return
    current_app.logger.info(f"[room-created] code={code} sid={sid}")
    emit('room_created', {'code': code})


def handle_join_room(data=None):
    code = data.get('code') if isinstance(data, dict) else None
    if not is_valid_room_code(code):
        return
    sid = _get_sid()
    try:
        host_sid = _rooms().join(code, sid)
    except RoomError as exc:
        current_app.logger.info(f"[join-refused] code={code} sid={sid} reason={type(exc).__name__}")
        emit('join_error', {'message': exc.message})
        return
    current_app.logger.info(f"[room-joined] code={code} sid={sid}")
    if host_sid:
        emit('game_start', {'color': WHITE, 'code': code}, to=host_sid)
    emit('game_start', {'color': BLACK, 'code': code})
    if not host_sid:
        # Host already left; the joiner is seated in an abandoned room
        emit('opponent_disconnected')


def _make_relay_handler(event: str, validator: Optional[Callable[[object], bool]]):
    def handler(data=None):
        sid = _get_sid()
        rooms = _rooms()
        code = rooms.room_for(sid)
        if code is None:
            return
        if validator is not None and not validator(data):
            return
        rooms.touch(code)
        target = rooms.relay_target(code, sid)
        if not target:
            return
        if validator is None:
            emit(event, to=target)
        else:
            emit(event, data, to=target)

    handler.__name__ = f'handle_{event}'
    return handler


def handle_disconnect(reason=None):
    sid = _get_sid()
    rooms = _rooms()
    code = rooms.room_for(sid)
    if code is None:
        return
    opponent = rooms.relay_target(code, sid)
    if opponent:
        emit('opponent_disconnected', to=opponent)
    rooms.vacate(code, sid)
    current_app.logger.info(f"[room-vacated] code={code} sid={sid}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    for event, validator in RELAY_EVENTS.items():
        socketio.on_event(event, _make_relay_handler(event, validator), namespace=namespace)
