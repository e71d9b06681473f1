import logging
import queue
import threading
from typing import Any, Callable, Dict, Optional

from .codec import CommandDecodeError, decode_command, encode_snapshot
from .engine import SharedTimer

_CLOSED = object()


class Session:
    """Per-connection loop racing inbound frames against a fixed tick.

    The transport thread hands frames to ``deliver``; ``run`` (on its own
    background task) waits on them with a timeout equal to the time left
    until the next tick, and services one trigger per iteration. A due tick
    always goes first, so a flood of commands cannot starve snapshots.

    ``send`` receives each encoded snapshot and returns False once the
    connection can no longer take frames, which ends the loop.
    """

    def __init__(
        self,
        sid: str,
        timer: SharedTimer,
        send: Callable[[Dict[str, Any]], bool],
        interval: float = 0.1,
        logger: Optional[logging.Logger] = None,
    ):
        self.sid = sid
        self._timer = timer
        self._send = send
        self._interval = interval
        self._logger = logger or logging.getLogger(__name__)
        self._inbox: queue.Queue = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def deliver(self, frame: Any) -> None:
        if not self.closed:
            self._inbox.put(frame)

    def close(self) -> None:
        self._closed.set()
        self._inbox.put(_CLOSED)

    def run(self) -> None:
        clock = self._timer.clock
        last_tick = clock.now()
        reason = 'closed'
        while not self._closed.is_set():
            wait = self._interval - clock.elapsed(last_tick)
            if wait <= 0:
                last_tick = clock.now()
                if not self._tick():
                    reason = 'send-failed'
                    break
                continue
            try:
                frame = self._inbox.get(timeout=wait)
            except queue.Empty:
                continue
            if frame is _CLOSED:
                break
            self._handle_frame(frame)
        self._closed.set()
        self._logger.info(f"[session-end] sid={self.sid} reason={reason}")

    def _handle_frame(self, frame: Any) -> None:
        try:
            command = decode_command(frame)
        except CommandDecodeError as exc:
            self._logger.warning(f"[decode-error] sid={self.sid} {exc}")
            return
        self._timer.apply(command)

    def _tick(self) -> bool:
        # The timer lock is released before the send
        payload = encode_snapshot(self._timer.tick())
        return bool(self._send(payload))
