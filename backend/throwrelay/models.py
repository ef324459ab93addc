import uuid
from datetime import datetime, timezone
from typing import Optional

from throwrelay.errors import AnomalousOccupancy


def generate_room_id(length=8):
    """Generate a short, URL-safe room id."""
    return uuid.uuid4().hex[:length]


def normalize_room_id(raw) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    room_id = raw.strip().lower()
    return room_id or None


class Room:
    def __init__(self, room_id: str, created_at: float):
        self.id = room_id
        self._created_at = created_at
        self.occupant_count = 0

    @property
    def created_at(self) -> float:
        return self._created_at

    def occupy(self) -> None:
        self.occupant_count += 1

    def release(self) -> None:
        if self.occupant_count <= 0:
            self.occupant_count = 0
            raise AnomalousOccupancy(f"room {self.id} is already empty")
        self.occupant_count -= 1

    def is_expired(self, now: float, retention_window: float) -> bool:
        # Occupied rooms are kept regardless of age
        return self.occupant_count == 0 and (now - self._created_at) > retention_window

    def to_dict(self):
        return {
            'room_id': self.id,
            'occupant_count': self.occupant_count,
            'created_at': datetime.fromtimestamp(self._created_at, tz=timezone.utc).isoformat(),
        }


class ConnectionSession:
    def __init__(self, connection_id: str):
        self.connection_id = connection_id
        self.current_room: Optional[str] = None

    @property
    def is_joined(self) -> bool:
        return self.current_room is not None

    def __repr__(self):
        return f"<ConnectionSession {self.connection_id} room={self.current_room}>"
