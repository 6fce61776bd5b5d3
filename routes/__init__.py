"""
Route handlers for the RWH Genius application
"""
import logging

from routes import core, users

logger = logging.getLogger(__name__)


def register_all_routes(app):
    """
    Register all application routes with the Flask app

    Args:
        app: Flask application instance
    """
    core.register_routes(app)
    users.register_routes(app)

    # Register Assessment routes (Blueprint)
    from routes.assessments import assessments_bp
    app.register_blueprint(assessments_bp)
    logger.info("Assessment routes registered successfully")

    logger.info("All routes registered successfully")
