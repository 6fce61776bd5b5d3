import dataclasses

import pytest

from config.feasibility import FinancialConfig
from services.feasibility import (
    FeasibilityService,
    build_financials,
    classify_feasibility,
    generate_scenarios,
    harvestable_liters,
    payback_years,
    recommend_structure,
    round_half_up,
    runoff_coefficient,
)
from services.models import (
    HIGHLY_SUITABLE,
    MODERATELY_SUITABLE,
    RAINFALL_FALLBACK,
    RAINFALL_LIVE,
    RECHARGE_PIT_TRENCH,
    RECHARGE_SHAFT,
    STORAGE_TANK,
    InvalidInputError,
    SiteInput,
)
from tests.conftest import StubResolver


@pytest.mark.parametrize("roof_type, expected", [
    ("rcc", 0.90),
    ("metal", 0.85),
    ("tile", 0.75),
    ("asbestos", 0.65),
    ("other", 0.60),
    ("thatch", 0.60),
    ("", 0.60),
])
def test_runoff_coefficient(roof_type: str, expected: float) -> None:
    assert runoff_coefficient(roof_type) == expected


def test_runoff_coefficient_uses_injected_table(config) -> None:
    custom = dataclasses.replace(config, runoff_coefficients={"rcc": 0.5}, default_runoff_coefficient=0.1)
    assert runoff_coefficient("rcc", custom) == 0.5
    assert runoff_coefficient("metal", custom) == 0.1


@pytest.mark.parametrize("rainfall, area, roof_type, expected", [
    (850, 100, "rcc", 76500),
    (1200, 200, "metal", 204000),
    (633, 47.5, "tile", 22551),
    (0, 100, "asbestos", 0),
    (900, 0, "other", 0),
])
def test_harvestable_liters_formula(rainfall: float, area: float, roof_type: str, expected: int) -> None:
    assert harvestable_liters(rainfall, area, roof_type) == expected


@pytest.mark.parametrize("rainfall, area, roof_type, expected", [
    (850, 1, "metal", 723),
    (850, 5, "metal", 3613),
    (1001, 10, "tile", 7508),
    (3, 2, "tile", 5),
])
def test_harvestable_liters_rounds_halves_up(rainfall: float, area: float, roof_type: str, expected: int) -> None:
    assert harvestable_liters(rainfall, area, roof_type) == expected


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(722.5) == 723
    assert round_half_up(722.4) == 722
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(1.25, 1) == 1.3
    assert round_half_up(8.333, 1) == 8.3
    assert isinstance(round_half_up(7.5), int)


def test_harvestable_liters_is_integer() -> None:
    assert isinstance(harvestable_liters(633, 47.5, "tile"), int)


def test_scenarios_band() -> None:
    scenarios = generate_scenarios(1000, 100, "rcc")

    assert scenarios["low"].rainfall_mm == 1000 * 0.7
    assert scenarios["actual"].rainfall_mm == 1000
    assert scenarios["high"].rainfall_mm == 1000 * 1.3
    assert scenarios["low"].harvestable_liters == harvestable_liters(1000 * 0.7, 100, "rcc")
    assert scenarios["high"].harvestable_liters == harvestable_liters(1000 * 1.3, 100, "rcc")


def test_scenarios_low_bound_is_floored_at_500() -> None:
    scenarios = generate_scenarios(400, 50, "metal")

    assert scenarios["low"].rainfall_mm == 500
    assert scenarios["low"].harvestable_liters == harvestable_liters(500, 50, "metal")


@pytest.mark.parametrize("annual", [1, 120, 714, 850, 2500, 11000])
def test_scenarios_follow_band_rules(annual: float) -> None:
    scenarios = generate_scenarios(annual, 80, "tile")
    low, actual, high = (scenarios[name].rainfall_mm for name in ("low", "actual", "high"))

    assert low >= 500
    if annual >= 500:
        assert low <= actual <= high
    assert actual == annual
    assert high == annual * 1.3
    assert low == max(annual * 0.7, 500)


def test_classifier_boundary() -> None:
    assert classify_feasibility(150000) == MODERATELY_SUITABLE
    assert classify_feasibility(150001) == HIGHLY_SUITABLE
    assert classify_feasibility(0) == MODERATELY_SUITABLE


@pytest.mark.parametrize("purpose, well, expected", [
    ("storage", "none", STORAGE_TANK),
    ("storage", "borewell", STORAGE_TANK),
    ("recharge", "borewell", RECHARGE_SHAFT),
    ("recharge", "openwell", RECHARGE_SHAFT),
    ("recharge", "both", RECHARGE_SHAFT),
    ("recharge", "none", RECHARGE_PIT_TRENCH),
    ("both", "both", RECHARGE_PIT_TRENCH),
    ("consultation", "borewell", RECHARGE_PIT_TRENCH),
])
def test_recommend_structure(purpose: str, well: str, expected: str) -> None:
    assert recommend_structure(purpose, well) == expected


def test_recommend_structure_rejects_unknown_values() -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        recommend_structure("irrigation", "none")
    assert excinfo.value.field == "purpose"

    with pytest.raises(InvalidInputError) as excinfo:
        recommend_structure("storage", "tubewell")
    assert excinfo.value.field == "existingWell"


def test_payback_years() -> None:
    assert payback_years(150000) == 8.3
    assert payback_years(60000) == 3.3
    assert payback_years(300000) == 16.7


def test_build_financials(config) -> None:
    financials = build_financials(config)

    tiers = financials["cost_tiers"]
    assert [tiers[name].cost for name in ("basic", "standard", "premium")] == [60000, 150000, 300000]
    assert tiers["basic"].structure == "Simple Recharge Pit + First-Flush Filter"
    assert financials["payback_years"] == 8.3
    assert financials["project_cost_estimate"] == {"min": 60000, "max": 300000}


def test_build_financials_with_other_savings(config) -> None:
    custom = dataclasses.replace(config, financial=FinancialConfig(base_annual_savings=30000))
    assert build_financials(custom)["payback_years"] == 5.0


def test_payback_years_rounds_halves_up(config) -> None:
    custom = dataclasses.replace(config, financial=FinancialConfig(base_annual_savings=100))

    assert payback_years(25, custom) == 0.3
    assert payback_years(125, custom) == 1.3


def test_assess_with_default_rainfall(storage_site) -> None:
    resolver = StubResolver(850, RAINFALL_FALLBACK)
    result = FeasibilityService(resolver).assess(storage_site)

    assert resolver.calls == ["Nowhere In Particular"]
    assert result.annual_rainfall_mm == 850
    assert result.harvestable_water_liters == 76500
    assert result.feasibility_tier == MODERATELY_SUITABLE
    assert result.recommended_structure == STORAGE_TANK
    assert result.rainfall_source == RAINFALL_FALLBACK
    assert result.estimated_payback_years == 8.3
    assert result.scenarios["actual"].harvestable_liters == 76500


def test_assess_highly_suitable_metal_roof() -> None:
    site = SiteInput(location="Pune", roof_area_sqm=200, roof_type="metal",
                     existing_well="borewell", purpose="recharge")
    result = FeasibilityService(StubResolver(1200, RAINFALL_LIVE)).assess(site)

    assert result.harvestable_water_liters == 204000
    assert result.feasibility_tier == HIGHLY_SUITABLE
    assert result.recommended_structure == RECHARGE_SHAFT
    assert result.rainfall_source == RAINFALL_LIVE


def test_assess_hydrogeological_profile_defaults(storage_site) -> None:
    result = FeasibilityService(StubResolver()).assess(storage_site)

    assert result.hydrogeological_profile == {
        "localRainfallMm": 850,
        "soilType": "Alluvial",
        "principalAquifer": "Deep Alluvial Aquifer",
        "groundwaterDepthMeters": 20,
    }


def test_assess_keeps_supplied_site_details() -> None:
    site = SiteInput(location="Kochi", roof_area_sqm=90, roof_type="tile", existing_well="openwell",
                     purpose="both", groundwater_depth_meters=7.5, soil_type="laterite")
    result = FeasibilityService(StubResolver(3000)).assess(site)

    assert result.hydrogeological_profile["soilType"] == "laterite"
    assert result.hydrogeological_profile["groundwaterDepthMeters"] == 7.5


def test_assess_rejects_bad_enum_before_rainfall_lookup() -> None:
    resolver = StubResolver()
    site = SiteInput(location="Delhi", roof_area_sqm=100, roof_type="rcc", existing_well="none", purpose="sell")

    with pytest.raises(InvalidInputError):
        FeasibilityService(resolver).assess(site)
    assert resolver.calls == []
