import logging
import math
import threading
from numbers import Real
from typing import Any, Optional, Protocol

from throwrelay.errors import ProtocolViolation
from throwrelay.models import normalize_room_id
from .registry import RoomRegistry
from .sessions import SessionTable

ROOM_JOINED = 'roomJoined'
ROOM_ERROR = 'roomError'
THROW = 'throw'

THROW_AXES = ('x', 'y', 'z')


class Transport(Protocol):
    def send(self, connection_id: str, event: str, payload: Any) -> None: ...

    def send_to_room(self, room_id: str, event: str, payload: Any, skip: Optional[str] = None) -> None: ...

    def enter_room(self, connection_id: str, room_id: str) -> None: ...

    def leave_room(self, connection_id: str, room_id: str) -> None: ...


def validate_throw(data) -> None:
    """Raise ProtocolViolation unless data is a finite 3D vector record."""
    if not isinstance(data, dict):
        raise ProtocolViolation(f"throw payload must be an object, got {type(data).__name__}")
    for axis in THROW_AXES:
        if axis not in data:
            raise ProtocolViolation(f"throw payload missing '{axis}'")
        value = data[axis]
        # bool is an int subclass but never a valid component
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ProtocolViolation(f"throw component '{axis}' is not a number: {value!r}")
        try:
            finite = math.isfinite(value)
        except OverflowError:
            # ints too large for a float
            finite = False
        if not finite:
            raise ProtocolViolation(f"throw component '{axis}' is not finite: {value!r}")


class RelayCore:
    """Join/leave protocol and throw fan-out for live connections.

    Every public method handles one transport event to completion while
    holding the relay lock, so a disconnect can never interleave with a
    join or a forward for the same connection.
    """

    def __init__(self, registry: RoomRegistry, transport: Transport,
                 sessions: Optional[SessionTable] = None, logger: Optional[logging.Logger] = None):
        self.registry = registry
        self.transport = transport
        self.sessions = sessions if sessions is not None else SessionTable()
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    def connect(self, connection_id: str) -> None:
        with self._lock:
            self.sessions.open(connection_id)
        self.logger.info(f"[connect] sid={connection_id}")

    def join(self, connection_id: str, raw_room_id) -> Optional[str]:
        """Move the connection into a room.

        Returns the resolved room id, or None when the room is unknown (the
        requester alone is told via a room error).
        """
        with self._lock:
            room_id = normalize_room_id(raw_room_id)
            session = self.sessions.get(connection_id)
            if room_id is not None and session is not None and session.current_room == room_id:
                self.logger.debug(f"[join-again] sid={connection_id} room={room_id}")
                self.transport.send(connection_id, ROOM_JOINED, {'roomId': room_id})
                return room_id

            # Lookup and increment are one registry operation; a sweep cannot
            # remove the room in between
            if room_id is None or not self.registry.occupy(room_id):
                self.logger.info(f"[join-miss] sid={connection_id} room={raw_room_id!r}")
                self.transport.send(connection_id, ROOM_ERROR, {'message': 'Room does not exist'})
                return None

            if session is None:
                session = self.sessions.open(connection_id)
            if session.current_room is not None:
                self._leave(session)

            session.current_room = room_id
            self.transport.enter_room(connection_id, room_id)
            self.logger.info(f"[join] sid={connection_id} room={room_id}")
            self.transport.send(connection_id, ROOM_JOINED, {'roomId': room_id})
            return room_id

    def throw(self, connection_id: str, data) -> bool:
        """Forward a throw to everyone else in the sender's room.

        Fire-and-forget: nothing is ever sent back to the sender. Returns
        whether the throw was forwarded.
        """
        with self._lock:
            session = self.sessions.get(connection_id)
            try:
                if session is None or not session.is_joined:
                    raise ProtocolViolation('throw received but client is not in a room')
                validate_throw(data)
            except ProtocolViolation as exc:
                self.logger.warning(f"[throw-drop] sid={connection_id} {exc}")
                return False

            room_id = session.current_room
            self.logger.debug(f"[throw] sid={connection_id} room={room_id} data={data}")
            self.transport.send_to_room(room_id, THROW, data, skip=connection_id)
            return True

    def disconnect(self, connection_id: str) -> None:
        with self._lock:
            session = self.sessions.close(connection_id)
            if session is None:
                return
            if session.current_room is not None:
                self._leave(session)
        self.logger.info(f"[disconnect] sid={connection_id}")

    def _leave(self, session) -> None:
        room_id = session.current_room
        self.registry.decrement_occupancy(room_id)
        session.current_room = None
        self.transport.leave_room(session.connection_id, room_id)
        self.logger.info(f"[leave] sid={session.connection_id} room={room_id}")
