# monster_siege/__init__.py
from .routes import siege_bp
from .sockets import register_siege_socket_handlers


def init_siege(app, socketio):
    app.register_blueprint(siege_bp)
    register_siege_socket_handlers(socketio, app.config.get("SIEGE_BROADCAST_INTERVAL"))
