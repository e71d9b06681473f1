"""Timer domain services: the shared countdown and per-client sessions.

This package holds the timer state machine, its wire codec and the session
loop. Socket handlers and HTTP routes import from here, keeping transport
concerns separated from the countdown mechanics.
"""

from .clock import MonotonicClock
from .codec import CommandDecodeError, decode_command, encode_snapshot, format_display
from .engine import SharedTimer, TimerState
from .session import Session

__all__ = [
    'CommandDecodeError',
    'MonotonicClock',
    'Session',
    'SharedTimer',
    'TimerState',
    'decode_command',
    'encode_snapshot',
    'format_display',
]
