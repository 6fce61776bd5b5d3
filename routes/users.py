"""
Routes for phone-keyed user registration
"""
import logging
from flask import request

from services.database import DatabaseService
from services.models import InvalidInputError
from utils.cors import jsonify_with_cors
from utils.validation import validate_phone

logger = logging.getLogger(__name__)

# Initialize database service
db_service = DatabaseService()


def register_routes(app):
    """
    Register all user-related routes

    Args:
        app: Flask application instance
    """

    @app.route('/api/register', methods=['POST'])
    def register_user():
        """Quick registration; succeeds for new and already registered phones alike"""
        data = request.get_json(silent=True) or {}

        try:
            phone = validate_phone(data.get('phone'))
        except InvalidInputError as e:
            return jsonify_with_cors({'error': str(e)}), 400

        if not db_service.enabled:
            return jsonify_with_cors({'error': 'Database not configured'}), 503

        user = db_service.find_or_create_user(phone, data.get('fullName') or None)
        if not user:
            return jsonify_with_cors({'error': 'Database error'}), 500

        return jsonify_with_cors({
            'success': True,
            'message': 'Registration successful or user already exists.',
            'userId': user['id']
        }), 200

    @app.route('/api/users', methods=['GET'])
    def list_users():
        """All registered users (debugging aid)"""
        users = db_service.list_users()
        if users is None:
            return jsonify_with_cors({'message': 'Error fetching user data.'}), 500
        return jsonify_with_cors(users), 200
