"""Main application entry point for the NETbilling gateway backend."""
import logging

from core.app_factory import build_netbilling_client, create_app
from core.logging_config import init_logging
from config import Config

# Initialize logging
init_logging(Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize NETbilling Client
logger.info("[App Init] Checking NETbilling configuration...")
logger.info("[App Init] NETBILLING_ACCOUNT_ID: %s", 'SET' if Config.NETBILLING_ACCOUNT_ID else 'NOT SET')
logger.info("[App Init] NETBILLING_SITE_TAG: %s", Config.NETBILLING_SITE_TAG or 'NOT SET')
logger.info("[App Init] NETBILLING_ENV: %s", Config.NETBILLING_ENV)

netbilling_client, missing = build_netbilling_client(Config)
if netbilling_client is not None:
    logger.info("✅ NETbilling client initialized successfully")
else:
    logger.error("❌ NETbilling not configured; missing: %s", ', '.join(missing))

# Create Flask app
app = create_app(Config, netbilling_client)


# Health check endpoint
@app.route('/', methods=['GET'])
def health_check():
    """Root health check endpoint."""
    return {
        'status': 'healthy',
        'service': 'NETbilling Gateway Backend',
        'version': '1.0.0'
    }


if __name__ == '__main__':
    app.run(debug=Config.DEBUG, host=Config.HOST, port=Config.PORT)
