from flask import current_app, request
from flask_socketio import emit


def _relay():
    return current_app.extensions['throwrelay'].relay


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    _relay().connect(_get_sid())


def handle_disconnect(*args):
    # Newer Flask-SocketIO passes a disconnect reason
    _relay().disconnect(_get_sid())


def handle_join_room(data):
    # Browser clients send the bare id; JSON clients may wrap it
    if isinstance(data, dict):
        data = data.get('roomId') or data.get('room_id')
    _relay().join(_get_sid(), data)


def handle_throw(data):
    _relay().throw(_get_sid(), data)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the relay namespace."""
    from throwrelay import socketio

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('throw', handle_throw, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
