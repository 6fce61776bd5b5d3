"""
Rainwater Harvesting Feasibility Service
Estimates harvestable roof runoff, classifies feasibility and recommends a structure
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from config.feasibility import DEFAULT_CONFIG
from services.models import (
    FeasibilityResult, ScenarioPoint, InvalidInputError,
    HIGHLY_SUITABLE, MODERATELY_SUITABLE,
    STORAGE_TANK, RECHARGE_SHAFT, RECHARGE_PIT_TRENCH,
    PURPOSES, WELL_TYPES
)

logger = logging.getLogger(__name__)


def round_half_up(value, places=0):
    """
    Round with ties away from zero, on the exact binary value of the float

    round_half_up(722.5) -> 723, round_half_up(0.25, 1) -> 0.3
    """
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)


def runoff_coefficient(roof_type, config=DEFAULT_CONFIG):
    """Fraction of rainfall collectible from the roof; unknown materials use the 'other' value"""
    return config.runoff_coefficients.get(roof_type, config.default_runoff_coefficient)


def harvestable_liters(rainfall_mm, roof_area_sqm, roof_type, config=DEFAULT_CONFIG):
    """
    Harvestable water volume in liters per year

    Formula: Rainfall (mm) x Area (m2) x Runoff Coefficient = Liters
    """
    return round_half_up(rainfall_mm * roof_area_sqm * runoff_coefficient(roof_type, config))


def generate_scenarios(annual_rainfall_mm, roof_area_sqm, roof_type, config=DEFAULT_CONFIG):
    """Low / actual / high sensitivity band around the resolved rainfall"""
    rainfall = config.rainfall
    low_rainfall = max(annual_rainfall_mm * rainfall.low_factor, rainfall.low_floor_mm)
    high_rainfall = annual_rainfall_mm * rainfall.high_factor

    return {
        name: ScenarioPoint(mm, harvestable_liters(mm, roof_area_sqm, roof_type, config))
        for name, mm in (
            ('low', low_rainfall),
            ('actual', annual_rainfall_mm),
            ('high', high_rainfall),
        )
    }


def classify_feasibility(harvestable, config=DEFAULT_CONFIG):
    if harvestable > config.highly_suitable_threshold_liters:
        return HIGHLY_SUITABLE
    return MODERATELY_SUITABLE


def recommend_structure(purpose, existing_well):
    """
    Decision table, first match wins:
        storage                         -> Storage Tank (Cistern)
        recharge + borewell/openwell/both -> Recharge Shaft
        anything else                   -> Recharge Pit/Trench
    """
    if purpose not in PURPOSES:
        raise InvalidInputError(f"Unknown purpose: {purpose}", field='purpose')
    if existing_well not in WELL_TYPES:
        raise InvalidInputError(f"Unknown existing well type: {existing_well}", field='existingWell')

    if purpose == 'storage':
        return STORAGE_TANK
    if purpose == 'recharge' and existing_well in ('borewell', 'openwell', 'both'):
        return RECHARGE_SHAFT
    return RECHARGE_PIT_TRENCH


def payback_years(cost, config=DEFAULT_CONFIG):
    """Years of assumed annual savings needed to recover the cost, one decimal"""
    return round_half_up(cost / config.financial.base_annual_savings, 1)


def build_financials(config=DEFAULT_CONFIG):
    """Fixed cost tiers plus the headline (standard tier) payback period"""
    tiers = config.financial.tiers()
    return {
        'cost_tiers': tiers,
        'payback_years': payback_years(tiers['standard'].cost, config),
        'project_cost_estimate': {'min': tiers['basic'].cost, 'max': tiers['premium'].cost}
    }


class FeasibilityService:
    """
    Run a full site assessment:
    - Annual rainfall (Rainfall Resolver, live or fallback)
    - Roof runoff and harvestable volume
    - Feasibility tier, recommended structure
    - Cost tiers and three-scenario sensitivity band
    """

    def __init__(self, rainfall_resolver, config=DEFAULT_CONFIG):
        self.rainfall_resolver = rainfall_resolver
        self.config = config

    def assess(self, site):
        """
        Args:
            site: SiteInput

        Returns:
            FeasibilityResult
        """
        logger.info(f"Assessing site at '{site.location}' ({site.roof_area_sqm} m2, {site.roof_type})")

        # 1. Recommendation first so bad enums fail before any network call
        recommended_structure = recommend_structure(site.purpose, site.existing_well)

        # 2. Annual rainfall
        rainfall = self.rainfall_resolver.resolve(site.location)
        logger.info(f"Annual rainfall: {rainfall.annual_mm}mm (source: {rainfall.source})")

        # 3. Scenarios - the actual point is the headline harvest figure
        scenarios = generate_scenarios(rainfall.annual_mm, site.roof_area_sqm, site.roof_type, self.config)
        harvestable = scenarios['actual'].harvestable_liters

        logger.info(f"Harvestable water: {harvestable} L/year (runoff {runoff_coefficient(site.roof_type, self.config):.2f})")

        # 4. Classification and financials
        tier = classify_feasibility(harvestable, self.config)
        financials = build_financials(self.config)

        site_defaults = self.config.site
        groundwater_depth = site.groundwater_depth_meters or site_defaults.groundwater_depth_meters

        return FeasibilityResult(
            annual_rainfall_mm=rainfall.annual_mm,
            harvestable_water_liters=harvestable,
            feasibility_tier=tier,
            recommended_structure=recommended_structure,
            scenarios=scenarios,
            cost_tiers=financials['cost_tiers'],
            estimated_payback_years=financials['payback_years'],
            rainfall_source=rainfall.source,
            project_cost_estimate=financials['project_cost_estimate'],
            hydrogeological_profile={
                'localRainfallMm': rainfall.annual_mm,
                'soilType': site.soil_type or site_defaults.soil_type,
                'principalAquifer': site_defaults.aquifer_type,
                'groundwaterDepthMeters': groundwater_depth
            }
        )
