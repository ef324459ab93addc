from typing import Dict, Iterator, Optional

from throwrelay.models import ConnectionSession


class SessionTable:
    """Live connection sessions keyed by connection id."""

    def __init__(self):
        self._sessions: Dict[str, ConnectionSession] = {}

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, connection_id):
        return connection_id in self._sessions

    def __iter__(self) -> Iterator[ConnectionSession]:
        return iter(list(self._sessions.values()))

    def open(self, connection_id: str) -> ConnectionSession:
        session = self._sessions.get(connection_id)
        if session is None:
            session = ConnectionSession(connection_id)
            self._sessions[connection_id] = session
        return session

    def get(self, connection_id: str) -> Optional[ConnectionSession]:
        return self._sessions.get(connection_id)

    def close(self, connection_id: str) -> Optional[ConnectionSession]:
        return self._sessions.pop(connection_id, None)

    def in_room(self, room_id: str):
        return [s for s in self._sessions.values() if s.current_room == room_id]
