"""
Core routes for the application (banner, health checks)
"""
import logging
import time
from utils.cors import jsonify_with_cors
from utils.config import CORS_ORIGIN
from routes import users
from services.database import EXPECTED_TABLES

logger = logging.getLogger(__name__)


def register_routes(app):
    """
    Register core application routes

    Args:
        app: Flask application instance
    """
    @app.route('/')
    def index():
        return jsonify_with_cors({
            'status': 'API Running',
            'message': 'Welcome to the RWH Genius API. Use /health for full check.',
            'timestamp': time.time()
        }), 200

    @app.route('/health')
    def health_check():
        """Simple health check endpoint that doesn't depend on external services"""
        return jsonify_with_cors({
            'status': 'healthy',
            'timestamp': time.time(),
            'cors_origin': CORS_ORIGIN,
            'message': 'Backend service is running'
        }), 200

    @app.route('/db-health', methods=['GET'])
    def database_health():
        """Check database connection and table presence"""
        db_service = users.db_service
        if not db_service.enabled:
            return jsonify_with_cors({
                'status': 'disabled',
                'message': 'Database not configured - DATABASE_URL not set'
            }), 503

        existing_tables = db_service.check_tables()
        if existing_tables is None:
            return jsonify_with_cors({
                'status': 'error',
                'message': 'Database connection failed'
            }), 503

        return jsonify_with_cors({
            'status': 'connected',
            'message': 'Database connection successful',
            'tables_exist': existing_tables,
            'tables_expected': EXPECTED_TABLES,
            'all_tables_present': set(EXPECTED_TABLES) <= set(existing_tables)
        }), 200
