"""Relay error taxonomy.

None of these are fatal: each is handled where it is detected and only
ever affects the connection (or HTTP request) that caused it.
"""


class RelayError(Exception):
    """Base class for relay errors."""


class RoomNotFound(RelayError):
    def __init__(self, room_id):
        super().__init__(f"Room does not exist: {room_id!r}")
        self.room_id = room_id


class ProtocolViolation(RelayError):
    """A message arrived that the relay refuses to act on."""


class AnomalousOccupancy(RelayError):
    """An occupancy change that would break the room's counter."""
