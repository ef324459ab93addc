import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from throwrelay.errors import AnomalousOccupancy, RoomNotFound
from throwrelay.models import Room, generate_room_id

DEFAULT_RETENTION_SEC = 2 * 60 * 60


class RoomRegistry:
    """Authoritative in-memory store of rooms and their occupancy.

    All map mutations are serialized on a single re-entrant lock so the
    registry stays consistent when Socket.IO handlers and the expiry
    sweeper run on different threads.
    """

    def __init__(
        self,
        retention_window: float = DEFAULT_RETENTION_SEC,
        id_length: int = 8,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None,
    ):
        self.retention_window = retention_window
        self.id_length = id_length
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.RLock()

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def create_room(self) -> str:
        with self._lock:
            room_id = generate_room_id(self.id_length)
            while room_id in self._rooms:
                self.logger.debug(f"[room-id-collision] {room_id}")
                room_id = generate_room_id(self.id_length)
            self._rooms[room_id] = Room(room_id, created_at=self.clock())
        self.logger.info(f"[room-create] room={room_id}")
        return room_id

    def exists(self, room_id: str) -> bool:
        with self._lock:
            return room_id in self._rooms

    def get(self, room_id: str) -> Room:
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def occupancy(self, room_id: str) -> int:
        return self.get(room_id).occupant_count

    def occupy(self, room_id: str) -> bool:
        """Increment occupancy if the room exists; False when it does not."""
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            room.occupy()
            count = room.occupant_count
        self.logger.debug(f"[occupancy] room={room_id} count={count}")
        return True

    def increment_occupancy(self, room_id: str) -> None:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                self.logger.warning(f"[occupancy-anomaly] increment on unknown room={room_id}")
                return
            room.occupy()
            count = room.occupant_count
        self.logger.debug(f"[occupancy] room={room_id} count={count}")

    def decrement_occupancy(self, room_id: str) -> None:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                self.logger.warning(f"[occupancy-anomaly] decrement on unknown room={room_id}")
                return
            try:
                room.release()
            except AnomalousOccupancy as exc:
                self.logger.warning(f"[occupancy-anomaly] {exc}")
                return
            count = room.occupant_count
        self.logger.debug(f"[occupancy] room={room_id} count={count}")

    def sweep_expired(self, now: Optional[float] = None, retention_window: Optional[float] = None) -> List[str]:
        """Delete unoccupied rooms older than the retention window.

        Returns the ids that were removed.
        """
        if now is None:
            now = self.clock()
        if retention_window is None:
            retention_window = self.retention_window
        with self._lock:
            expired = [rid for rid, room in self._rooms.items() if room.is_expired(now, retention_window)]
            for rid in expired:
                del self._rooms[rid]
        if expired:
            self.logger.info(f"[sweep] removed={len(expired)} rooms={expired}")
        return expired

    def list_active(self) -> List[str]:
        self.sweep_expired()
        with self._lock:
            return list(self._rooms.keys())
