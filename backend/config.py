import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3131'))
    # Comma separated list, or '*' for any origin (the game is public)
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Room limits
    MAX_ROOMS = int(os.environ.get('MAX_ROOMS', '100'))
    ROOM_CODE_MAX_ATTEMPTS = int(os.environ.get('ROOM_CODE_MAX_ATTEMPTS', '1000'))
    # Abandoned rooms (both seats empty) are kept this long before reaping (seconds)
    ROOM_GRACE_PERIOD_SEC = int(os.environ.get('ROOM_GRACE_PERIOD_SEC', '300'))
    ROOM_REAP_INTERVAL_SEC = int(os.environ.get('ROOM_REAP_INTERVAL_SEC', '60'))
    # Socket connection rate limiting, per client address
    SOCKET_RATE_MAX = int(os.environ.get('SOCKET_RATE_MAX', '10'))
    SOCKET_RATE_WINDOW_SEC = int(os.environ.get('SOCKET_RATE_WINDOW_SEC', '60'))
    # Idle addresses are dropped from the ledgers every five windows unless overridden
    RATE_LEDGER_SWEEP_SEC = int(os.environ.get('RATE_LEDGER_SWEEP_SEC', str(5 * SOCKET_RATE_WINDOW_SEC)))
    # Plain HTTP rate limiting, per client address
    HTTP_RATE_MAX = int(os.environ.get('HTTP_RATE_MAX', '200'))
    HTTP_RATE_WINDOW_SEC = int(os.environ.get('HTTP_RATE_WINDOW_SEC', '900'))
    # Behind a proxy the first X-Forwarded-For hop is the client
    TRUST_X_FORWARDED_FOR = os.environ.get('TRUST_X_FORWARDED_FOR', 'true').lower() == 'true'
    # The HTTP limiter keys on the socket peer unless explicitly told the proxy header is trustworthy
    HTTP_TRUST_X_FORWARDED_FOR = os.environ.get('HTTP_TRUST_X_FORWARDED_FOR', 'false').lower() == 'true'
    # Background sweeps are off under TESTING unless this is set
    ENABLE_MAINTENANCE_IN_TESTS = False
