import click
from countdown import create_app, socketio

app = create_app()


@click.command()
@click.option('--host', default=None, help='Bind address (defaults to COUNTDOWN_HOST).')
@click.option('--port', type=int, default=None, help='Bind port (defaults to COUNTDOWN_PORT).')
@click.option('--debug/--no-debug', default=False, help='Run with the Werkzeug debugger.')
def serve(host, port, debug):
    """Serve the shared countdown over Socket.IO."""
    host = host or app.config['HOST']
    port = port or app.config['PORT']
    app.logger.info(f"[serve] listening on {host}:{port} namespace=/ws")
    # Use SocketIO server to enable websockets
    socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    serve()
