from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from services.models import RAINFALL_FALLBACK, RAINFALL_LIVE
from services.rainfall import GeocodingClient, PrecipitationArchiveClient, RainfallResolver

GEOCODING_URL = "https://geocode.test/search"
ARCHIVE_URL = "https://archive.test/v1/archive"


def _response(payload) -> MagicMock:
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def _resolver(config) -> RainfallResolver:
    return RainfallResolver(
        GeocodingClient(GEOCODING_URL, "test-agent", timeout=5),
        PrecipitationArchiveClient(ARCHIVE_URL, timeout=5),
        config=config,
        today=lambda: date(2025, 6, 15),
    )


@pytest.mark.parametrize("location", ["", "   ", None])
def test_blank_location_uses_default_without_lookup(config, location) -> None:
    with patch("services.rainfall.requests.get") as mock_get:
        estimate = _resolver(config).resolve(location)

    assert estimate.annual_mm == 850
    assert estimate.source == RAINFALL_FALLBACK
    mock_get.assert_not_called()


def test_geocode_miss_returns_default(config) -> None:
    with patch("services.rainfall.requests.get", return_value=_response([])) as mock_get:
        estimate = _resolver(config).resolve("Atlantis")

    assert estimate.annual_mm == 850
    assert estimate.is_fallback
    assert mock_get.call_count == 1


def test_live_rainfall_sums_previous_calendar_year(config) -> None:
    geocode = _response([{"lat": "26.9124", "lon": "75.7873"}])
    archive = _response({"daily": {"precipitation_sum": [10.4, None, 200.3, 0.0, 389.6]}})

    with patch("services.rainfall.requests.get", side_effect=[geocode, archive]) as mock_get:
        estimate = _resolver(config).resolve("  Jaipur  ")

    assert estimate.annual_mm == 600
    assert estimate.source == RAINFALL_LIVE

    geocode_call, archive_call = mock_get.call_args_list
    assert geocode_call.args[0] == GEOCODING_URL
    assert geocode_call.kwargs["params"]["q"] == "Jaipur"
    assert geocode_call.kwargs["headers"]["User-Agent"] == "test-agent"
    assert geocode_call.kwargs["timeout"] == 5

    params = archive_call.kwargs["params"]
    assert archive_call.args[0] == ARCHIVE_URL
    assert params["latitude"] == 26.9124
    assert params["longitude"] == 75.7873
    assert params["start_date"] == "2024-01-01"
    assert params["end_date"] == "2024-12-31"
    assert params["daily"] == "precipitation_sum"
    assert archive_call.kwargs["timeout"] == 5


def test_annual_total_rounds_to_whole_millimetres(config) -> None:
    geocode = _response([{"lat": "12.97", "lon": "77.59"}])
    archive = _response({"daily": {"precipitation_sum": [400.2, 500.4]}})

    with patch("services.rainfall.requests.get", side_effect=[geocode, archive]):
        estimate = _resolver(config).resolve("Bengaluru")

    assert estimate.annual_mm == 901
    assert isinstance(estimate.annual_mm, int)


def test_annual_total_rounds_halves_up(config) -> None:
    geocode = _response([{"lat": "12.97", "lon": "77.59"}])
    archive = _response({"daily": {"precipitation_sum": [400.25, 500.25]}})

    with patch("services.rainfall.requests.get", side_effect=[geocode, archive]):
        estimate = _resolver(config).resolve("Bengaluru")

    assert estimate.annual_mm == 901


@pytest.mark.parametrize("payload", [
    {"error": True, "reason": "Latitude must be in range of -90 to 90°."},
    {"daily": {}},
    {"daily": {"precipitation_sum": []}},
    {},
    ["not", "a", "dict"],
])
def test_bad_archive_payload_returns_default(config, payload) -> None:
    geocode = _response([{"lat": "19.07", "lon": "72.87"}])

    with patch("services.rainfall.requests.get", side_effect=[geocode, _response(payload)]):
        estimate = _resolver(config).resolve("Mumbai")

    assert estimate.annual_mm == 850
    assert estimate.is_fallback


@pytest.mark.parametrize("error", [
    requests.exceptions.Timeout("timed out"),
    requests.exceptions.ConnectionError("unreachable"),
])
def test_network_failure_returns_default(config, error) -> None:
    with patch("services.rainfall.requests.get", side_effect=error):
        estimate = _resolver(config).resolve("Chennai")

    assert estimate.annual_mm == 850
    assert estimate.is_fallback


def test_geocode_http_error_returns_default(config) -> None:
    failing = _response([])
    failing.raise_for_status.side_effect = requests.exceptions.HTTPError("503")

    with patch("services.rainfall.requests.get", return_value=failing):
        estimate = _resolver(config).resolve("Hyderabad")

    assert estimate.is_fallback


def test_malformed_json_returns_default(config) -> None:
    broken = MagicMock()
    broken.raise_for_status.return_value = None
    broken.json.side_effect = ValueError("Expecting value")

    with patch("services.rainfall.requests.get", return_value=broken):
        estimate = _resolver(config).resolve("Kolkata")

    assert estimate.annual_mm == 850
    assert estimate.is_fallback
