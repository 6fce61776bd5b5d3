"""
Structure details and report presentation

Derived at render time from a stored assessment and its stored result;
nothing here is written back to the FeasibilityResult.
"""
import logging
from datetime import date

from config.feasibility import DEFAULT_CONFIG
from config.translations import get_translations
from services.feasibility import payback_years, round_half_up, runoff_coefficient
from services.models import (
    StructureDetail, STORAGE_TANK, RECHARGE_SHAFT, RECHARGE_PIT_TRENCH, RAINFALL_FALLBACK
)

logger = logging.getLogger(__name__)


def format_indian_number(value):
    """Group digits the en-IN way: 1,50,000"""
    digits = str(round_half_up(value))
    sign = ''
    if digits.startswith('-'):
        sign, digits = '-', digits[1:]
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ','.join(groups + [tail])


def resolve_structure_detail(structure, daily_water_usage_liters=None, config=DEFAULT_CONFIG):
    """Illustrative dimensions and construction note for a recommended structure"""
    if structure == RECHARGE_SHAFT:
        return StructureDetail(
            dimension_or_capacity='1.5 - 2.0 meters',
            depth='18 - 30 meters',
            construction_note='Vertical shaft accessing deep aquifer. Requires expert drilling and graded filter media.'
        )

    if structure == STORAGE_TANK:
        sizing = config.sizing
        volume_liters = (daily_water_usage_liters or sizing.default_daily_usage_liters) * sizing.storage_buffer_days
        volume_m3 = volume_liters / 1000
        return StructureDetail(
            dimension_or_capacity=f"Capacity: {round_half_up(volume_m3, 1):.1f} m³ (Approx {format_indian_number(volume_liters)} Liters)",
            depth='Varies (Above or Underground)',
            construction_note='Sealed, opaque plastic or reinforced concrete tank for collection and direct use.'
        )

    if structure == RECHARGE_PIT_TRENCH:
        return StructureDetail(
            dimension_or_capacity='1.0 - 1.5 meters wide',
            depth='1.5 - 3.0 meters deep',
            construction_note='Simple pit/trench filled with layers of boulders, gravel, and sand for shallow percolation.'
        )

    return StructureDetail(
        dimension_or_capacity='Varies by dimension',
        depth='Varies by type',
        construction_note='Requires custom design based on final site visit.'
    )


def format_soil_type(soil_type):
    if not soil_type or soil_type == 'unknown':
        return 'Unknown (Assumed Alluvial)'
    return soil_type[0].upper() + soil_type[1:] + ' (Infiltration potential varies)'


def build_cost_tier_rows(result, config=DEFAULT_CONFIG):
    """Per-tier rows; standard uses the stored headline payback, the others are recomputed"""
    rows = []
    for name in ('basic', 'standard', 'premium'):
        tier = result.cost_tiers[name]
        if name == 'standard':
            payback = result.estimated_payback_years
        else:
            payback = payback_years(tier.cost, config)
        rows.append({
            'name': name,
            'label': tier.label,
            'cost': tier.cost,
            'structure': tier.structure,
            'payback': payback
        })
    return rows


def build_report_context(site, result, lang='en', user=None, config=DEFAULT_CONFIG, today=None):
    """
    Compile everything the renderer needs for one report

    Args:
        site: stored SiteInput
        result: stored FeasibilityResult
        lang: report language code
        user: optional stored user record (dict)

    Returns:
        dict: report context
    """
    detail = resolve_structure_detail(result.recommended_structure, site.daily_water_usage_liters, config)
    profile = result.hydrogeological_profile or {}

    logger.info(f"Building report context: structure={result.recommended_structure}, lang={lang}")

    return {
        'date': (today or date.today()).strftime('%d/%m/%Y'),
        'lang': lang,
        'translations': get_translations(lang),
        'user': user or {},
        'site': site,
        'result': result,
        'cost_tiers': build_cost_tier_rows(result, config),
        'structure_rows': [
            ('structureType', result.recommended_structure),
            ('dimension', detail.dimension_or_capacity),
            ('depth', detail.depth),
            ('construction', detail.construction_note),
        ],
        'soil_description': format_soil_type(site.soil_type),
        'hydro_profile': {
            'rainfall_mm': profile.get('localRainfallMm', result.annual_rainfall_mm),
            'aquifer': profile.get('principalAquifer', config.site.aquifer_type),
            'groundwater_depth_m': profile.get('groundwaterDepthMeters', config.site.groundwater_depth_meters),
        },
        'runoff_coefficient': runoff_coefficient(site.roof_type, config),
        'scenarios': result.scenarios,
        'rainfall_is_fallback': result.rainfall_source == RAINFALL_FALLBACK,
    }
