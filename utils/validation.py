"""
Validation of incoming assessment and registration payloads
"""
import math
import re

from services.models import SiteInput, InvalidInputError, ROOF_TYPES, WELL_TYPES, PURPOSES

PHONE_PATTERN = re.compile(r'^[6-9]\d{9}$')

# Form fields stored with the assessment but not used by the calculation
EXTRA_FIELDS = {
    'buildingType': 'buildingType',
    'occupants': 'numberOfOccupants',
    'openSpace': 'openSpace',
    'budget': 'budgetRange',
}


def validate_phone(phone):
    if not isinstance(phone, str) or not PHONE_PATTERN.match(phone.strip()):
        raise InvalidInputError('Invalid phone number', field='phone')
    return phone.strip()


def _number(data, key, required=False, minimum=0):
    value = data.get(key)
    if value is None or value == '':
        if required:
            raise InvalidInputError(f'{key} is required', field=key)
        return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        raise InvalidInputError(f'{key} must be a number', field=key)
    if not math.isfinite(number):
        raise InvalidInputError(f'{key} must be a finite number', field=key)
    if number < minimum:
        raise InvalidInputError(f'{key} must be at least {minimum}', field=key)
    return number


def _choice(data, key, choices):
    value = data.get(key)
    if not value:
        raise InvalidInputError(f'{key} is required', field=key)
    if value not in choices:
        raise InvalidInputError(f"{key} must be one of: {', '.join(choices)}", field=key)
    return value


def parse_site_input(data):
    """
    Build a SiteInput from an assessment form payload

    Raises:
        InvalidInputError: missing or out-of-domain attribute
    """
    if not isinstance(data, dict):
        raise InvalidInputError('No JSON data provided')

    location = data.get('location')
    if location is not None and not isinstance(location, str):
        raise InvalidInputError('location must be text', field='location')

    soil_type = data.get('soilType') or None
    extra = {stored: data[key] for key, stored in EXTRA_FIELDS.items() if data.get(key) is not None}

    return SiteInput(
        location=(location or '').strip(),
        roof_area_sqm=_number(data, 'roofArea', required=True),
        roof_type=_choice(data, 'roofType', ROOF_TYPES),
        existing_well=_choice(data, 'existingWell', WELL_TYPES),
        purpose=_choice(data, 'purpose', PURPOSES),
        daily_water_usage_liters=_number(data, 'waterUsage'),
        groundwater_depth_meters=_number(data, 'groundwaterDepth'),
        soil_type=soil_type,
        extra=extra,
    )
