"""
Main entry point for the RWH Genius backend application
"""
import logging
from flask import Flask, request
from flask_cors import CORS

# Configure logging first
logging.basicConfig(level=logging.DEBUG,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from utils import config  # noqa: E402
from utils.cors import allowed_origin, jsonify_with_cors  # noqa: E402

app = Flask(__name__)

# Parse CORS_ORIGIN - comma-separated origins, or '*' to allow all
if config.CORS_ORIGIN == '*' or '*' in config.CORS_ORIGIN:
    cors_origins = '*'
    logger.info("CORS configured to allow all origins (*)")
else:
    cors_origins = [origin.strip() for origin in config.CORS_ORIGIN.split(',') if origin.strip()]
    logger.info(f"CORS configured with specific origins: {cors_origins}")

CORS(app,
     supports_credentials=True,
     origins=cors_origins,
     allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
     expose_headers=["Content-Type", "Content-Disposition"],
     methods=["GET", "POST", "OPTIONS"])


# Set CORS headers for all responses - needed for OPTIONS preflight requests
@app.after_request
def after_request(response):
    origin = allowed_origin(request.headers.get('Origin'))
    if origin:
        response.headers['Access-Control-Allow-Origin'] = origin
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization, X-Requested-With'
    response.headers['Access-Control-Allow-Credentials'] = 'true'
    return response


# --- ROUTE REGISTRATION ---
from routes import register_all_routes  # noqa: E402

register_all_routes(app)
logger.info("All modular routes registered.")

for rule in app.url_map.iter_rules():
    logger.debug(f"Route: {rule.rule} | Methods: {rule.methods} | Endpoint: {rule.endpoint}")


# Handle OPTIONS requests for CORS
@app.route('/', methods=['OPTIONS'])
@app.route('/<path:path>', methods=['OPTIONS'])
def options_handler(path=''):
    return jsonify_with_cors({}), 204


if __name__ == '__main__':
    logger.info(f"Starting Flask server on port {config.PORT}")
    app.run(debug=config.DEBUG, host='0.0.0.0', port=config.PORT)
