from relay import socketio


def reap_rooms(app) -> list:
    """Delete rooms left empty past the grace period; returns the removed codes."""
    registry = app.extensions['relay']['rooms']
    removed = registry.reap()
    if removed:
        app.logger.info(f"[reaper] removed={len(removed)} live={len(registry)}")
    return removed


def sweep_rate_ledgers(app) -> int:
    """Drop idle addresses from the socket and HTTP rate limit ledgers."""
    state = app.extensions['relay']
    dropped = state['socket_limiter'].sweep() + state['http_limiter'].sweep()
    if dropped:
        app.logger.debug(f"[rate-sweep] dropped={dropped}")
    return dropped


def _every(interval: float, job, app) -> None:
    while True:
        socketio.sleep(interval)
        try:
            job(app)
        except Exception:
            # logged, retried next period
            app.logger.exception(f"[maintenance-error] job={job.__name__}")


def start_maintenance(app) -> None:
    """Start the periodic room reaper and rate-ledger sweep.

    - No-ops in TESTING mode unless ENABLE_MAINTENANCE_IN_TESTS is set
    - Reaper runs every ROOM_REAP_INTERVAL_SEC
    - Ledger sweep runs every RATE_LEDGER_SWEEP_SEC (five socket windows by default)
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_MAINTENANCE_IN_TESTS'):
        return
    reap_every = int(app.config.get('ROOM_REAP_INTERVAL_SEC', 60))
    sweep_every = int(app.config.get('RATE_LEDGER_SWEEP_SEC') or 5 * int(app.config.get('SOCKET_RATE_WINDOW_SEC', 60)))
    socketio.start_background_task(_every, reap_every, reap_rooms, app)
    socketio.start_background_task(_every, sweep_every, sweep_rate_ledgers, app)
    app.logger.info(f"[maintenance-start] reap_every={reap_every}s sweep_every={sweep_every}s")
