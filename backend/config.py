import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173,"
    "http://127.0.0.1:5173,"
    "http://localhost:5174,"
    "http://127.0.0.1:5174"
)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Bind address for run.py
    HOST = os.environ.get('COUNTDOWN_HOST', '127.0.0.1')
    PORT = int(os.environ.get('COUNTDOWN_PORT', '3000'))
    # Snapshot cadence per connected client (ms)
    TICK_INTERVAL_MS = int(os.environ.get('TICK_INTERVAL_MS', '100'))
    # Upper bound on elapsed time one integration may consume (sec). 0 disables.
    MAX_CATCHUP_SEC = float(os.environ.get('MAX_CATCHUP_SEC', '0'))
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get('CORS_ORIGINS', DEFAULT_CORS_ORIGINS).split(',') if o.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
