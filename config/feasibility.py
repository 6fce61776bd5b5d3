"""
Configuration for rainwater harvesting feasibility calculations

All tables are frozen and built once at import. Components receive a
FeasibilityConfig explicitly; tests derive variants with dataclasses.replace.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_RUNOFF_COEFFICIENTS = MappingProxyType({
    'rcc': 0.90,       # Reinforced Cement Concrete
    'metal': 0.85,     # Metal sheet
    'tile': 0.75,      # Clay/concrete tiles
    'asbestos': 0.65,  # Asbestos sheet
    'other': 0.60      # Unknown materials
})


@dataclass(frozen=True)
class RainfallDefaults:
    annual_mm: int = 850  # mm/year - used when lookup fails or location not found
    timeout_seconds: float = 5.0
    low_factor: float = 0.7
    low_floor_mm: float = 500
    high_factor: float = 1.3


@dataclass(frozen=True)
class CostTier:
    label: str
    cost: int
    structure: str

    def to_dict(self) -> dict:
        return {'label': self.label, 'cost': self.cost, 'structure': self.structure}


@dataclass(frozen=True)
class FinancialConfig:
    base_annual_savings: int = 18000
    basic: CostTier = CostTier(
        label='Tier 1: Basic (Shallow Recharge/Small Storage)',
        cost=60000,
        structure='Simple Recharge Pit + First-Flush Filter',
    )
    standard: CostTier = CostTier(
        label='Tier 2: Standard (Recommended)',
        cost=150000,
        structure='Recharge Shaft or Medium Cistern + Multi-Stage Filtration',
    )
    premium: CostTier = CostTier(
        label='Tier 3: Premium (Max. Capacity/Deep Recharge)',
        cost=300000,
        structure='Advanced Recharge Shaft with Sump + Large Storage Tank',
    )

    def tiers(self) -> dict:
        return {'basic': self.basic, 'standard': self.standard, 'premium': self.premium}


@dataclass(frozen=True)
class StructureSizing:
    default_daily_usage_liters: float = 300
    storage_buffer_days: int = 60


@dataclass(frozen=True)
class SiteDefaults:
    groundwater_depth_meters: float = 20
    aquifer_type: str = 'Deep Alluvial Aquifer'
    soil_type: str = 'Alluvial'


@dataclass(frozen=True)
class FeasibilityConfig:
    runoff_coefficients: Mapping[str, float] = field(default_factory=lambda: DEFAULT_RUNOFF_COEFFICIENTS)
    default_runoff_coefficient: float = 0.60
    highly_suitable_threshold_liters: int = 150000
    rainfall: RainfallDefaults = RainfallDefaults()
    financial: FinancialConfig = FinancialConfig()
    sizing: StructureSizing = StructureSizing()
    site: SiteDefaults = SiteDefaults()


def build_config(daily_usage_liters=None, timeout_seconds=None) -> FeasibilityConfig:
    """Build the process-wide configuration, applying optional overrides"""
    sizing = StructureSizing()
    if daily_usage_liters is not None:
        sizing = StructureSizing(default_daily_usage_liters=daily_usage_liters)

    rainfall = RainfallDefaults()
    if timeout_seconds is not None:
        rainfall = RainfallDefaults(timeout_seconds=timeout_seconds)

    return FeasibilityConfig(rainfall=rainfall, sizing=sizing)


DEFAULT_CONFIG = FeasibilityConfig()
