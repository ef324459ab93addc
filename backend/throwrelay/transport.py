from typing import Any, Optional


class SocketIOTransport:
    """Relay transport backed by a Flask-SocketIO server.

    Socket.IO rooms mirror relay room membership so fan-out can be a single
    room emit that skips the sender.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, connection_id: str, event: str, payload: Any) -> None:
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def send_to_room(self, room_id: str, event: str, payload: Any, skip: Optional[str] = None) -> None:
        self.socketio.emit(event, payload, to=self._room(room_id), skip_sid=skip, namespace=self.namespace)

    def enter_room(self, connection_id: str, room_id: str) -> None:
        self.socketio.server.enter_room(connection_id, self._room(room_id), namespace=self.namespace)

    def leave_room(self, connection_id: str, room_id: str) -> None:
        self.socketio.server.leave_room(connection_id, self._room(room_id), namespace=self.namespace)

    @staticmethod
    def _room(room_id: str) -> str:
        return f"room:{room_id}"
