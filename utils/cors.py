"""
CORS helpers for JSON and file responses
"""
from flask import jsonify, request

from utils.config import CORS_ORIGIN


def allowed_origin(request_origin, configured=CORS_ORIGIN):
    """Origin to echo back, '*' when every origin is allowed, None when refused"""
    if configured == '*' or '*' in configured:
        return '*'
    origins = [origin.strip() for origin in configured.split(',') if origin.strip()]
    if request_origin in origins:
        return request_origin
    return None


def add_cors_headers(response):
    """
    Add CORS headers to a Flask response object.

    Args:
        response: Flask Response object from jsonify() or make_response()

    Returns:
        Response object with CORS headers added
    """
    origin = allowed_origin(request.headers.get('Origin'))
    if origin:
        response.headers['Access-Control-Allow-Origin'] = origin
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization, X-Requested-With'
    response.headers['Access-Control-Allow-Credentials'] = 'true'
    response.headers['Access-Control-Expose-Headers'] = 'Content-Disposition'
    return response


def jsonify_with_cors(*args, **kwargs):
    """
    Create a JSON response with CORS headers already added.

    Usage:
        return jsonify_with_cors({'status': 'success', 'assessmentId': ...})
        return jsonify_with_cors({'error': 'Not found'}), 404
    """
    response = jsonify(*args, **kwargs)
    return add_cors_headers(response)
