"""
Configuration settings for the RWH Genius feasibility service
"""
import os
import logging

from config.feasibility import build_config

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

# Data store
DATABASE_URL = os.environ.get('DATABASE_URL')
logger.info(f"Database configured: {bool(DATABASE_URL)}")

# External rainfall lookups
GEOCODING_URL = os.environ.get('GEOCODING_URL', 'https://nominatim.openstreetmap.org/search')
WEATHER_ARCHIVE_URL = os.environ.get('WEATHER_ARCHIVE_URL', 'https://archive-api.open-meteo.com/v1/archive')
GEOCODING_USER_AGENT = os.environ.get('GEOCODING_USER_AGENT', 'RWHGenius-App/1.0 (contact@yourdomain.com)')
RAINFALL_API_TIMEOUT = float(os.environ.get('RAINFALL_API_TIMEOUT', 5))
logger.info(f"Rainfall lookups: geocoding={GEOCODING_URL}, archive={WEATHER_ARCHIVE_URL}, timeout={RAINFALL_API_TIMEOUT}s")

# Storage tank sizing assumption (liters/day)
DEFAULT_DAILY_WATER_USAGE = float(os.environ.get('DEFAULT_DAILY_WATER_USAGE', 300))
logger.info(f"Default daily water usage: {DEFAULT_DAILY_WATER_USAGE} L")

# Report fonts - core PDF fonts only cover Latin-1
REPORT_FONT_PATH = os.environ.get('REPORT_FONT_PATH')
REPORT_FONT_BOLD_PATH = os.environ.get('REPORT_FONT_BOLD_PATH', REPORT_FONT_PATH)
SUPPORTED_LANGUAGES = ['en', 'hi']

# CORS configuration
CORS_ORIGIN = os.environ.get('CORS_ORIGIN', '*')
logger.info(f"CORS origin set to: {CORS_ORIGIN}")

# Server port
PORT = int(os.environ.get('PORT', 8000))
logger.info(f"Server port set to: {PORT}")

# Debug mode
DEBUG = os.environ.get('DEBUG', 'true').lower() == 'true'
logger.info(f"Debug mode: {DEBUG}")

# Domain configuration shared by every request
FEASIBILITY_CONFIG = build_config(
    daily_usage_liters=DEFAULT_DAILY_WATER_USAGE,
    timeout_seconds=RAINFALL_API_TIMEOUT
)
