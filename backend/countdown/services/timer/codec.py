import json
import math
from typing import Any, Dict

from countdown.models import Command, Reset, SetTime, Snapshot, Start, Stop


class CommandDecodeError(ValueError):
    """Inbound payload is not a valid timer command."""


# Unsigned 32-bit range for SetTime fields
MAX_UNSIGNED = 2 ** 32 - 1

_SIMPLE_COMMANDS = {
    'Start': Start,
    'Stop': Stop,
    'Reset': Reset,
}


def _unsigned(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise CommandDecodeError(f"'{key}' must be a non-negative integer, got {value!r}")
    if value < 0 or value > MAX_UNSIGNED:
        raise CommandDecodeError(f"'{key}' must be an integer in 0..{MAX_UNSIGNED}, got {value!r}")
    return value


def decode_command(payload: Any) -> Command:
    """Decode one inbound frame into a command.

    Accepts an already-decoded mapping (Socket.IO and Flask hand us those)
    or raw JSON text/bytes. Raises CommandDecodeError on anything else.
    """
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise CommandDecodeError(f"invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CommandDecodeError(f"command must be an object, got {type(payload).__name__}")

    name = payload.get('cmd')
    if not isinstance(name, str):
        raise CommandDecodeError(f"'cmd' must be a string, got {name!r}")
    if name in _SIMPLE_COMMANDS:
        return _SIMPLE_COMMANDS[name]()
    if name == 'SetTime':
        return SetTime(minutes=_unsigned(payload, 'min'), seconds=_unsigned(payload, 'sec'))
    raise CommandDecodeError(f"unknown command {name!r}")


def format_display(seconds: float) -> str:
    """Render remaining seconds as M:SS, flooring partial seconds."""
    whole = int(math.floor(max(0.0, seconds)))
    minutes, secs = divmod(whole, 60)
    return f"{minutes}:{secs:02d}"


def encode_snapshot(snapshot: Snapshot) -> Dict[str, Any]:
    return {
        'running': snapshot.running,
        'display': format_display(snapshot.time_left),
        'finished': snapshot.finished,
    }
