"""Room domain services: registry, sessions, relay and expiry.

This package holds the transport-agnostic relay logic. Socket handlers and
HTTP routes call into it; nothing here imports Flask-SocketIO directly
except the expiry scheduler, which needs a background task runner.
"""

from .registry import RoomRegistry
from .sessions import SessionTable
from .relay import RelayCore, validate_throw

__all__ = ['RoomRegistry', 'SessionTable', 'RelayCore', 'validate_throw']
