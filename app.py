import os
import secrets
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

# Load .env before anything reads configuration
load_dotenv()

from logging_helper import LoggingHelper, LogType
from constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from error_handler import ConfigurationError, validate_environment_variable
from clinic_api import ClinicAPI
from routes.table_routes import bp as tables_bp, init_table_routes

# Get logger instance
logger = LoggingHelper.get_logger(LogType.MAIN)


app = Flask(__name__)

# ============================================================================
# FLASK CONFIGURATION
# ============================================================================

def _get_secret_key() -> str:
    """Get secret key from env, or generate a session-only one."""
    env_key = os.getenv('FLASK_SECRET_KEY')
    if env_key:
        return env_key
    logger.warning("FLASK_SECRET_KEY not set. Using session-only key.")
    return secrets.token_hex(32)

app.config['SECRET_KEY'] = _get_secret_key()

# Running behind a reverse proxy in production
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

# ============================================================================
# TABLE CONFIGURATION
# ============================================================================

max_page_size = validate_environment_variable(
    'MAX_PAGE_SIZE', default=MAX_PAGE_SIZE,
    converter=int, validator=lambda x: x >= 1)
default_page_size = validate_environment_variable(
    'DEFAULT_PAGE_SIZE', default=DEFAULT_PAGE_SIZE,
    converter=int, validator=lambda x: 1 <= x <= max_page_size)

# ============================================================================
# CLINIC API INITIALIZATION
# ============================================================================

def _create_clinic_api() -> Optional[ClinicAPI]:
    """Create the clinic API client, or None when it is not configured."""
    try:
        return ClinicAPI.from_env()
    except ConfigurationError as e:
        logger.warning(f"{e} Table endpoints will answer 503.")
        return None

clinic_api = _create_clinic_api()

# ============================================================================
# BLUEPRINT REGISTRATION
# ============================================================================

init_table_routes(clinic_api, default_page_size=default_page_size, max_page_size=max_page_size)
app.register_blueprint(tables_bp)
LoggingHelper.log_operation("table routes", "started")


@app.route('/health', methods=['GET'])
def health():
    """Liveness check; reports whether the clinic API is configured."""
    return jsonify({
        'status': 'ok',
        'clinic_api_configured': clinic_api is not None
    })


if __name__ == '__main__':
    port = validate_environment_variable('PORT', default=5000, converter=int,
                                         validator=lambda x: 0 < x < 65536)
    app.run(host='0.0.0.0', port=port)
