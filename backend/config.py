import os


def _origins(value):
    origins = [o.strip() for o in value.split(',') if o.strip()]
    if not origins or origins == ['*']:
        return '*'
    return origins


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Unoccupied rooms older than this are swept (seconds)
    ROOM_RETENTION_SEC = int(os.environ.get('ROOM_RETENTION_SEC', str(2 * 60 * 60)))
    ROOM_ID_LENGTH = int(os.environ.get('ROOM_ID_LENGTH', '8'))
    # Optional: periodic expiry sweep (sec). 0 sweeps only when rooms are listed.
    ROOM_SWEEP_INTERVAL_SEC = int(os.environ.get('ROOM_SWEEP_INTERVAL_SEC', '0'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    CORS_ALLOWED_ORIGINS = _origins(os.environ.get('CORS_ALLOWED_ORIGINS', '*'))
    # Optional: external base URL for controller links (e.g. behind a tunnel)
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '3001'))
