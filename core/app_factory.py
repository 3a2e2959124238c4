from flask import Flask
from flask_cors import CORS

from config import NetbillingSettings
from services.netbilling_integration import NetbillingClient


def create_app(config_object, netbilling_client=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config['CONFIG'] = config_object
    app.config['NETBILLING_CLIENT'] = netbilling_client
    CORS(app)

    from routes.health import bp as health_bp
    from routes.config_info import bp as config_info_bp
    from routes.netbilling import bp as netbilling_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(config_info_bp)
    app.register_blueprint(netbilling_bp)
    return app


def build_netbilling_client(config_object):
    """Return a NetbillingClient, or None with the missing setting names."""
    settings = NetbillingSettings.from_config(config_object)
    missing = settings.validate()
    if missing:
        return None, missing
    return NetbillingClient(settings), []
