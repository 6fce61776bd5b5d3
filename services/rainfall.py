"""
Rainfall Resolver Service
Turns a free-text location into an annual rainfall figure using
Nominatim geocoding and the Open-Meteo historical archive (both FREE, no API key)
"""

import requests
import logging
from datetime import date

from config.feasibility import DEFAULT_CONFIG
from services.feasibility import round_half_up
from services.models import RainfallEstimate, RAINFALL_LIVE, RAINFALL_FALLBACK

logger = logging.getLogger(__name__)


class GeocodingClient:
    """Resolve a place name to its best-match (lat, lon) via Nominatim"""

    def __init__(self, url, user_agent, timeout):
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout

    def lookup(self, place_name):
        """
        Returns:
            tuple: (lat, lon) of the best match, or None when nothing matched
        """
        params = {
            "q": place_name,
            "format": "json",
            "limit": 1
        }

        response = requests.get(
            self.url,
            params=params,
            headers={'User-Agent': self.user_agent},
            timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()

        if not data:
            return None

        return float(data[0]['lat']), float(data[0]['lon'])


class PrecipitationArchiveClient:
    """Fetch daily precipitation sums for one calendar year from Open-Meteo"""

    def __init__(self, url, timeout):
        self.url = url
        self.timeout = timeout

    def daily_precipitation(self, lat, lon, year):
        """
        Returns:
            list: daily precipitation in mm (entries may be None), or None when
            the archive signals an error or returns no precipitation data
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": f"{year}-01-01",
            "end_date": f"{year}-12-31",
            "daily": "precipitation_sum",
            "timezone": "auto"
        }

        response = requests.get(self.url, params=params, timeout=self.timeout)
        data = response.json()

        if not isinstance(data, dict):
            logger.error(f"Weather data API returned malformed payload for [{lat}, {lon}]")
            return None

        daily = data.get('daily') or {}
        if data.get('error') or not daily.get('precipitation_sum'):
            logger.error(f"Weather data API failed for [{lat}, {lon}]: {data.get('reason', 'No precipitation data.')}")
            return None

        return daily['precipitation_sum']


class RainfallResolver:
    """
    Resolve annual rainfall (mm/year) for a location.

    Never raises: every lookup failure degrades to the configured default and
    the estimate is tagged as a fallback so callers can disclose it.
    """

    def __init__(self, geocoder, archive, config=DEFAULT_CONFIG, today=date.today):
        self.geocoder = geocoder
        self.archive = archive
        self.config = config
        self.today = today

    def _fallback(self):
        return RainfallEstimate(self.config.rainfall.annual_mm, RAINFALL_FALLBACK)

    def resolve(self, location):
        standardized_location = (location or '').strip()

        if not standardized_location:
            return self._fallback()

        try:
            coordinates = self.geocoder.lookup(standardized_location)

            if coordinates is None:
                logger.warning(f"Geocoding failed for: {location}. Using default rainfall.")
                return self._fallback()

            lat, lon = coordinates
            year_before = self.today().year - 1

            daily_precip = self.archive.daily_precipitation(lat, lon, year_before)
            if daily_precip is None:
                return self._fallback()

            annual_rainfall = round_half_up(sum(p or 0 for p in daily_precip))

            logger.info(f"Open-Meteo: {annual_rainfall}mm for {year_before} at ({lat:.4f}, {lon:.4f})")

            return RainfallEstimate(annual_rainfall, RAINFALL_LIVE)

        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Rainfall lookup error for {location}: {e}")
            return self._fallback()


def create_rainfall_resolver(settings, config=DEFAULT_CONFIG):
    """Build a resolver wired to the configured external lookups"""
    timeout = config.rainfall.timeout_seconds
    return RainfallResolver(
        GeocodingClient(settings.GEOCODING_URL, settings.GEOCODING_USER_AGENT, timeout),
        PrecipitationArchiveClient(settings.WEATHER_ARCHIVE_URL, timeout),
        config=config
    )
