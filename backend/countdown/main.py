from flask import Blueprint, current_app, jsonify, request
from countdown import timer
from countdown.services.timer import CommandDecodeError, decode_command, encode_snapshot

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Countdown timer server. Connect a Socket.IO client to /ws.'})


@main.route('/api/timer', methods=['GET'])
def get_timer():
    """Current timer projection; does not advance the shared state."""
    return jsonify(encode_snapshot(timer.peek()))


@main.route('/api/timer/command', methods=['POST'])
def post_command():
    """Apply one command, same payload shape as the socket 'command' event."""
    data = request.get_json(silent=True)
    try:
        command = decode_command(data)
    except CommandDecodeError as exc:
        current_app.logger.warning(f"[decode-error] peer={request.remote_addr} {exc}")
        return jsonify({'error': str(exc)}), 400
    timer.apply(command)
    return jsonify(encode_snapshot(timer.peek())), 200
