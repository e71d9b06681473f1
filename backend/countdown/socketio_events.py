from flask_socketio import emit
from flask import current_app, request
from countdown import socketio, timer
from countdown.services.timer import Session
from typing import Any, Dict
import threading

NAMESPACE = '/ws'

_sessions: Dict[str, Session] = {}
_sessions_lock = threading.Lock()


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    sid = _get_sid()
    app = current_app._get_current_object()
    interval = int(app.config.get('TICK_INTERVAL_MS', 100)) / 1000.0
    session = Session(
        sid,
        timer,
        send=lambda payload: _send_snapshot(app, sid, payload),
        interval=interval,
        logger=app.logger,
    )
    with _sessions_lock:
        _sessions[sid] = session
    app.logger.info(f"[connect] sid={sid} peer={request.remote_addr}")
    emit('connected', {'message': f'Connected to {NAMESPACE}'})
    socketio.start_background_task(_run_session, app, session)


def handle_disconnect(reason=None):
    sid = _get_sid()
    with _sessions_lock:
        session = _sessions.pop(sid, None)
    if session:
        session.close()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")


def handle_command(data):
    with _sessions_lock:
        session = _sessions.get(_get_sid())
    if session:
        session.deliver(data)


def _run_session(app, session: Session) -> None:
    try:
        session.run()
    except Exception:
        app.logger.exception(f"[session-end] sid={session.sid} reason=error")
        # The loop is gone; close the connection too
        socketio.server.disconnect(session.sid, namespace=NAMESPACE)
    finally:
        with _sessions_lock:
            if _sessions.get(session.sid) is session:
                _sessions.pop(session.sid, None)


def _send_snapshot(app, sid: str, payload: Dict[str, Any]) -> bool:
    """Emit one snapshot to a single client; False once it is gone."""
    if not socketio.server.manager.is_connected(sid, NAMESPACE):
        return False
    try:
        # Use socketio.emit since this is called from a background task
        socketio.emit('snapshot', payload, to=sid, namespace=NAMESPACE)
    except Exception as exc:
        app.logger.info(f"[send-failed] sid={sid} {exc}")
        return False
    return True


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('command', handle_command, namespace=NAMESPACE)
