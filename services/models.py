"""
Data model for site assessments and feasibility results
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from config.feasibility import CostTier


ROOF_TYPES = ('rcc', 'metal', 'tile', 'asbestos', 'other')
WELL_TYPES = ('none', 'borewell', 'openwell', 'both')
PURPOSES = ('storage', 'recharge', 'both', 'consultation')

HIGHLY_SUITABLE = 'HIGHLY SUITABLE'
MODERATELY_SUITABLE = 'MODERATELY SUITABLE'

STORAGE_TANK = 'Storage Tank (Cistern)'
RECHARGE_SHAFT = 'Recharge Shaft'
RECHARGE_PIT_TRENCH = 'Recharge Pit/Trench'

RAINFALL_LIVE = 'live'
RAINFALL_FALLBACK = 'fallback'


class InvalidInputError(ValueError):
    """Raised when a site attribute is missing or outside its domain"""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class SiteInput:
    location: str
    roof_area_sqm: float
    roof_type: str
    existing_well: str
    purpose: str
    daily_water_usage_liters: Optional[float] = None
    groundwater_depth_meters: Optional[float] = None
    soil_type: Optional[str] = None
    # Collected by the assessment form, stored but unused by the calculation
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'location': self.location,
            'roofArea': self.roof_area_sqm,
            'roofType': self.roof_type,
            'existingWell': self.existing_well,
            'purpose': self.purpose,
            'dailyWaterUsage': self.daily_water_usage_liters,
            'groundwaterDepth': self.groundwater_depth_meters,
            'soilType': self.soil_type,
        }
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SiteInput':
        known = {'location', 'roofArea', 'roofType', 'existingWell', 'purpose',
                 'dailyWaterUsage', 'groundwaterDepth', 'soilType'}
        return cls(
            location=data.get('location') or '',
            roof_area_sqm=data['roofArea'],
            roof_type=data['roofType'],
            existing_well=data['existingWell'],
            purpose=data['purpose'],
            daily_water_usage_liters=data.get('dailyWaterUsage'),
            groundwater_depth_meters=data.get('groundwaterDepth'),
            soil_type=data.get('soilType'),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass(frozen=True)
class RainfallEstimate:
    annual_mm: int
    source: str = RAINFALL_LIVE

    @property
    def is_fallback(self) -> bool:
        return self.source == RAINFALL_FALLBACK


@dataclass(frozen=True)
class ScenarioPoint:
    rainfall_mm: float
    harvestable_liters: int

    def to_dict(self) -> Dict[str, Any]:
        return {'rainfall': self.rainfall_mm, 'harvestable': self.harvestable_liters}


@dataclass(frozen=True)
class StructureDetail:
    dimension_or_capacity: str
    depth: str
    construction_note: str


@dataclass(frozen=True)
class FeasibilityResult:
    annual_rainfall_mm: int
    harvestable_water_liters: int
    feasibility_tier: str
    recommended_structure: str
    scenarios: Dict[str, ScenarioPoint]
    cost_tiers: Dict[str, Any]
    estimated_payback_years: float
    rainfall_source: str = RAINFALL_LIVE
    project_cost_estimate: Dict[str, int] = field(default_factory=dict)
    hydrogeological_profile: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the stored report layout"""
        return {
            'overallFeasibilityScore': self.feasibility_tier,
            'annualHarvestableWaterLiters': self.harvestable_water_liters,
            'recommendedStructure': self.recommended_structure,
            'estimatedPaybackPeriodYears': self.estimated_payback_years,
            'costTiers': {name: tier.to_dict() for name, tier in self.cost_tiers.items()},
            'scenarios': {name: point.to_dict() for name, point in self.scenarios.items()},
            'projectCostEstimate': dict(self.project_cost_estimate),
            'hydrogeologicalProfile': dict(self.hydrogeological_profile),
            'rainfallSource': self.rainfall_source,
            'annualRainfallMm': self.annual_rainfall_mm,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeasibilityResult':
        profile = data.get('hydrogeologicalProfile') or {}
        return cls(
            annual_rainfall_mm=data.get('annualRainfallMm', profile.get('localRainfallMm')),
            harvestable_water_liters=data['annualHarvestableWaterLiters'],
            feasibility_tier=data['overallFeasibilityScore'],
            recommended_structure=data['recommendedStructure'],
            scenarios={
                name: ScenarioPoint(point['rainfall'], point['harvestable'])
                for name, point in (data.get('scenarios') or {}).items()
            },
            cost_tiers={
                name: CostTier(tier['label'], tier['cost'], tier['structure'])
                for name, tier in (data.get('costTiers') or {}).items()
            },
            estimated_payback_years=data['estimatedPaybackPeriodYears'],
            rainfall_source=data.get('rainfallSource', RAINFALL_LIVE),
            project_cost_estimate=data.get('projectCostEstimate') or {},
            hydrogeological_profile=profile,
        )
