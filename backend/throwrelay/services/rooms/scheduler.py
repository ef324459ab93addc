from throwrelay import socketio


def start_expiry_sweeper(app, registry) -> bool:
    """Run registry.sweep_expired() every ROOM_SWEEP_INTERVAL_SEC seconds.

    - No-ops in TESTING mode and when the interval is 0 (sweeps then only
      happen when rooms are listed)
    - Starts at most one sweeper per app
    """
    if app.config.get('TESTING'):
        return False
    try:
        interval = int(app.config.get('ROOM_SWEEP_INTERVAL_SEC', 0))
    except (TypeError, ValueError):
        app.logger.warning(f"[sweeper] bad ROOM_SWEEP_INTERVAL_SEC={app.config.get('ROOM_SWEEP_INTERVAL_SEC')!r}")
        return False
    state = app.extensions.get('throwrelay')
    if interval <= 0 or state is None or state.sweeper_started:
        return False

    state.sweeper_started = True

    def _worker(delay: int):
        app.logger.info(f"[sweeper-start] interval={delay}s retention={registry.retention_window}s")
        while True:
            socketio.sleep(delay)
            try:
                registry.sweep_expired()
            except Exception:
                # next pass retries
                app.logger.exception('[sweeper-error] sweep failed')

    socketio.start_background_task(_worker, interval)
    return True
