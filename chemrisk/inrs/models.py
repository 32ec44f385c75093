# -*- coding: utf-8 -*-
"""
INRS Chemical Risk Data Models

Pydantic v2 data models for the INRS simplified chemical-risk engine.

Enumerations (17):
    - PhysicalState, LabelingSystem, VLAType, ParticulateMatter,
      TimeReference, QuantityUnit, SolidForm, VentilationMaintenance,
      RiskLevel, Priority, AlertType, AlertSeverity
    - Ordinal classes backed by integers: FrequencyLevel,
      ProcedureClass, VentilationClass, DermalSurface, DermalFrequency

Input model:
    - ChemicalAgent

Result models (7):
    - HierarchyResult, InhalationResult, DermalResult, Alert,
      InventoryIssue, InventoryValidationResult, AssessmentResult

Ordinal fields on ChemicalAgent are declared as plain ``int``. An
out-of-range class is not rejected here; the reference tables clamp it
into range at lookup time.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from chemrisk.exceptions import InventoryValidationError


def _utcnow() -> datetime:
    """Return current UTC datetime with microseconds zeroed."""
    return datetime.now(timezone.utc).replace(microsecond=0)


# =============================================================================
# Enumerations
# =============================================================================


class PhysicalState(str, Enum):
    """Physical state of the agent as handled at the workplace."""

    SOLID = "solid"
    LIQUID = "liquid"
    GAS = "gas"
    AEROSOL = "aerosol"


class LabelingSystem(str, Enum):
    """Hazard labelling vocabulary present on the safety data sheet.

    OLD_R: Legacy Directive 67/548/EEC risk phrases (R-phrases).
    NEW_CLP: Regulation (EC) 1272/2008 hazard statements (H-phrases).
    BOTH: Both vocabularies are present.
    NONE: The product carries no hazard labelling.
    """

    OLD_R = "old_r"
    NEW_CLP = "new_clp"
    BOTH = "both"
    NONE = "none"


class VLAType(str, Enum):
    """Kind of occupational exposure limit declared."""

    ED = "vla_ed"
    EC = "vla_ec"
    BOTH = "both"


class ParticulateMatter(str, Enum):
    """Particulate qualifier attached to the exposure limit."""

    INHALABLE = "inhalable"
    RESPIRABLE = "respirable"
    NO = "no"


class TimeReference(str, Enum):
    """Time scale against which the usage frequency level is read."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class QuantityUnit(str, Enum):
    """Units accepted for the quantity used. Volumes assume density 1."""

    G = "g"
    KG = "kg"
    TON = "ton"
    ML = "ml"
    L = "l"


class SolidForm(str, Enum):
    """Granulometry of a solid agent (pulverulence)."""

    FINE_POWDER = "fine_powder"
    GRAIN_POWDER = "grain_powder"
    PELLETS = "pellets"


class VentilationMaintenance(str, Enum):
    """Whether the ventilation installation is maintained. Informational."""

    YES = "yes"
    UNSURE = "unsure"
    NO = "no"


class FrequencyLevel(IntEnum):
    """Frequency class (CF). The value is the class, 0-4."""

    NOT_USED = 0
    OCCASIONAL = 1
    INTERMITTENT = 2
    FREQUENT = 3
    PERMANENT = 4


class ProcedureClass(IntEnum):
    """Work procedure class, 1 (closed) to 4 (dispersive)."""

    CLOSED_PERMANENT = 1
    CLOSED_REGULAR_OPENING = 2
    OPEN = 3
    DISPERSIVE = 4


class VentilationClass(IntEnum):
    """Collective protection class, 1 (enclosing) to 5 (confined space)."""

    ENCLOSING = 1
    PARTIAL_CAPTURE = 2
    GENERAL_OR_OUTDOOR = 3
    NO_VENTILATION = 4
    CONFINED_SPACE = 5


class DermalSurface(IntEnum):
    """Exposed skin surface. The value is the surface score itself."""

    ONE_HAND = 1
    TWO_HANDS_OR_FOREARM = 2
    TWO_HANDS_PLUS_FOREARMS = 3
    EXTENSIVE_SURFACE = 10


class DermalFrequency(IntEnum):
    """Skin contact frequency. The value is the frequency score itself."""

    OCCASIONAL = 1
    INTERMITTENT = 2
    FREQUENT = 5
    PERMANENT = 10


class RiskLevel(str, Enum):
    """Characterization of an inhalation or dermal risk score.

    LOW: score <= 100; priority 3.
    MODERATE: 100 < score <= 1000; priority 2.
    VERY_HIGH: score > 1000; priority 1.
    """

    LOW = "low"
    MODERATE = "moderate"
    VERY_HIGH = "very_high"


class Priority(str, Enum):
    """Hierarchization priority tier of a potential risk."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AlertType(str, Enum):
    """Regulatory special cases flagged by the alert generator."""

    AMIANTO = "amianto"
    CARCINOGENIC = "carcinogenic"
    FIV = "fiv"
    LOW_VLA = "low_vla"
    TEMP_EXCEEDS_BP = "temp_exceeds_bp"
    CONFINED_SPACE = "confined_space"


class AlertSeverity(str, Enum):
    """Severity of an advisory alert."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


# =============================================================================
# Input model
# =============================================================================


class ChemicalAgent(BaseModel):
    """A chemical agent as entered in the assessment inventory.

    Attributes:
        id: Opaque agent identifier, unique within an inventory.
        commercial_name: Trade name of the product.
        substance_name: Name of the hazardous substance.
        cas_number: CAS registry number (not validated).
        physical_state: Physical state at the workplace.
        labeling_system: Which phrase vocabulary the SDS uses.
        r_phrases: Legacy risk phrases, e.g. ``"R45"`` or ``"R36/38"``.
        h_phrases: CLP hazard statements, e.g. ``"H350i"``.
        has_vla: Whether an occupational exposure limit is declared.
        vla_type: Kind of limit declared.
        vla_ed: Daily exposure limit (VLA-ED) in mg/m3.
        particulate_matter: Particulate qualifier of the limit.
        is_special_material: Whether a predefined special material applies.
        special_material_id: Identifier in the special-material catalogue.
        quantity: Quantity used over the time reference.
        quantity_unit: Unit of ``quantity``.
        time_reference: Time scale of the frequency level.
        frequency_level: Frequency class 0-4.
        boiling_point: Boiling point in degrees C (liquids).
        working_temperature: Process temperature in degrees C (liquids).
        is_spray: Whether the liquid is sprayed.
        has_fiv: Whether the limit carries the FIV notation.
        vapor_pressure: Vapour pressure in kPa.
        solid_form: Granulometry (solids).
        procedure_class: Work procedure class 1-4.
        ventilation_class: Collective protection class 1-5.
        ventilation_maintained: Maintenance status (not scored).
        has_dermal_toxicity: Whether the agent is toxic through the skin.
        has_skin_contact: Whether skin contact occurs.
        dermal_surface: Exposed surface score (1, 2, 3 or 10).
        dermal_frequency: Contact frequency score (1, 2, 5 or 10).
    """

    id: str = Field(..., description="Opaque agent identifier")

    # -- Identification ------------------------------------------------------
    commercial_name: str = Field(default="", description="Trade name")
    substance_name: str = Field(default="", description="Substance name")
    cas_number: str = Field(default="", description="CAS registry number")
    physical_state: PhysicalState = Field(
        default=PhysicalState.LIQUID,
        description="Physical state at the workplace",
    )

    # -- Hazard classification -----------------------------------------------
    labeling_system: LabelingSystem = Field(
        default=LabelingSystem.NEW_CLP,
        description="Phrase vocabulary used on the safety data sheet",
    )
    r_phrases: List[str] = Field(
        default_factory=list,
        description="Legacy R-phrases (case-insensitive)",
    )
    h_phrases: List[str] = Field(
        default_factory=list,
        description="CLP H-phrases (case-sensitive)",
    )
    has_vla: bool = Field(default=False, description="Exposure limit declared")
    vla_type: Optional[VLAType] = Field(None, description="Kind of limit")
    vla_ed: Optional[float] = Field(None, description="VLA-ED in mg/m3")
    particulate_matter: ParticulateMatter = Field(
        default=ParticulateMatter.NO,
        description="Particulate qualifier of the limit",
    )
    is_special_material: bool = Field(
        default=False,
        description="A predefined special material applies",
    )
    special_material_id: Optional[str] = Field(
        None,
        description="Identifier in the special-material catalogue",
    )

    # -- Quantity and frequency ----------------------------------------------
    quantity: float = Field(default=0.0, description="Quantity used")
    quantity_unit: QuantityUnit = Field(
        default=QuantityUnit.KG,
        description="Unit of quantity",
    )
    time_reference: TimeReference = Field(
        default=TimeReference.DAY,
        description="Time scale of the frequency level",
    )
    frequency_level: int = Field(
        default=FrequencyLevel.OCCASIONAL,
        description="Frequency class 0-4",
    )

    # -- Physico-chemical properties -----------------------------------------
    boiling_point: Optional[float] = Field(None, description="Boiling point, C")
    working_temperature: Optional[float] = Field(
        None,
        description="Working temperature, C",
    )
    is_spray: bool = Field(default=False, description="Sprayed liquid")
    has_fiv: bool = Field(default=False, description="FIV notation")
    vapor_pressure: Optional[float] = Field(None, description="Vapour pressure, kPa")
    solid_form: Optional[SolidForm] = Field(None, description="Solid granulometry")

    # -- Procedure and collective protection ---------------------------------
    procedure_class: int = Field(
        default=ProcedureClass.OPEN,
        description="Work procedure class 1-4",
    )
    ventilation_class: int = Field(
        default=VentilationClass.GENERAL_OR_OUTDOOR,
        description="Collective protection class 1-5",
    )
    ventilation_maintained: VentilationMaintenance = Field(
        default=VentilationMaintenance.YES,
        description="Ventilation maintenance status (not scored)",
    )

    # -- Dermal exposure -----------------------------------------------------
    has_dermal_toxicity: bool = Field(default=False, description="Dermal toxicity")
    has_skin_contact: bool = Field(default=False, description="Skin contact occurs")
    dermal_surface: Optional[int] = Field(None, description="Exposed surface score")
    dermal_frequency: Optional[int] = Field(None, description="Contact frequency score")

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate id is non-empty."""
        if not v or not v.strip():
            raise ValueError("id must not be empty")
        return v

    @field_validator("r_phrases", "h_phrases")
    @classmethod
    def drop_blank_phrases(cls, v: List[str]) -> List[str]:
        """Drop empty phrase entries left over from comma-separated input."""
        return [p for p in v if p and p.strip()]

    @property
    def display_name(self) -> str:
        """Commercial name, falling back to the substance name."""
        return self.commercial_name or self.substance_name


# =============================================================================
# Result models
# =============================================================================


class HierarchyResult(BaseModel):
    """Potential-risk hierarchization of one agent.

    Attributes:
        agent_id: Identifier of the evaluated agent.
        agent_name: Display name of the agent.
        danger_class: CP, 1-5.
        quantity_class: CC, 1-5.
        frequency_class: CF, 0-4.
        potential_exposure_class: CEP, 0-5.
        potential_risk_class: CRP, 1-5.
        risk_score: PRP, one of 1, 10, 100, 1000, 10000.
        ipa_percent: Share of the total potential risk score, percent.
        cumulative_percent: Running IPA total in ranked order, percent.
        priority: Priority tier.
        selected: Whether the agent goes to detailed evaluation.
    """

    agent_id: str
    agent_name: str = ""
    danger_class: int
    quantity_class: int
    frequency_class: int
    potential_exposure_class: int
    potential_risk_class: int
    risk_score: float
    ipa_percent: float = 0.0
    cumulative_percent: float = 0.0
    priority: Priority = Priority.LOW
    selected: bool = False

    model_config = {"extra": "forbid", "frozen": True}


class InhalationResult(BaseModel):
    """Inhalation risk (PRI) of one agent.

    ``risk_score`` is the plain product ``danger_score * volatility_score
    * procedure_score * protection_score * vla_correction_factor``.
    """

    agent_id: str
    agent_name: str = ""
    danger_class: int
    danger_score: float
    volatility_class: int
    volatility_score: float
    procedure_class: int
    procedure_score: float
    protection_class: int
    protection_score: float
    vla_correction_factor: float
    risk_score: float
    risk_level: RiskLevel
    priority_action: int
    characterization: str
    recommendation: str

    model_config = {"extra": "forbid", "frozen": True}


class DermalResult(BaseModel):
    """Dermal risk (PRD) of one agent."""

    agent_id: str
    agent_name: str = ""
    danger_class: int
    danger_score: float
    surface_score: float
    frequency_score: float
    risk_score: float
    risk_level: RiskLevel
    priority_action: int
    characterization: str

    model_config = {"extra": "forbid", "frozen": True}


class Alert(BaseModel):
    """Advisory annotation raised for one agent. Never alters a score."""

    id: str
    agent_id: str
    agent_name: str = ""
    type: AlertType
    title: str
    message: str
    severity: AlertSeverity

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def key(self) -> tuple:
        """Identity of the alert: ``(agent_id, type)``."""
        return (self.agent_id, self.type)


class InventoryIssue(BaseModel):
    """A single missing or inconsistent inventory entry."""

    agent_id: Optional[str] = None
    field: str
    message: str

    model_config = {"extra": "forbid", "frozen": True}


class InventoryValidationResult(BaseModel):
    """Outcome of the inventory completeness checks."""

    issues: List[InventoryIssue] = Field(default_factory=list)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def valid(self) -> bool:
        """True when no issue was found."""
        return not self.issues

    @property
    def errors(self) -> List[str]:
        """Issue messages, in detection order."""
        return [issue.message for issue in self.issues]

    def raise_for_errors(self) -> None:
        """Raise :class:`InventoryValidationError` when issues exist."""
        if self.issues:
            raise InventoryValidationError(
                f"Inventory is not ready for assessment: "
                f"{len(self.issues)} issue(s)",
                issues=[issue.model_dump() for issue in self.issues],
            )


class AssessmentResult(BaseModel):
    """Everything one assessment run produces, regenerated in full."""

    hierarchy: List[HierarchyResult] = Field(default_factory=list)
    inhalation: List[InhalationResult] = Field(default_factory=list)
    dermal: List[DermalResult] = Field(default_factory=list)
    alerts: List[Alert] = Field(default_factory=list)
    pareto_agent_ids: List[str] = Field(default_factory=list)
    provenance_hash: str = ""
    calculated_at: datetime = Field(default_factory=_utcnow)

    model_config = {"extra": "forbid", "frozen": True}

    def summary(self) -> Dict[str, Any]:
        """Counts per risk level and alert severity for dashboards."""
        inhalation_levels = {level.value: 0 for level in RiskLevel}
        for result in self.inhalation:
            inhalation_levels[result.risk_level.value] += 1
        dermal_levels = {level.value: 0 for level in RiskLevel}
        for result in self.dermal:
            dermal_levels[result.risk_level.value] += 1
        severities = {severity.value: 0 for severity in AlertSeverity}
        for alert in self.alerts:
            severities[alert.severity.value] += 1
        return {
            "agents": len(self.hierarchy),
            "selected": sum(1 for r in self.hierarchy if r.selected),
            "high_priority": sum(
                1 for r in self.hierarchy if r.priority == Priority.HIGH
            ),
            "inhalation": inhalation_levels,
            "dermal": dermal_levels,
            "alerts": severities,
        }


__all__ = [
    # Enumerations
    "PhysicalState",
    "LabelingSystem",
    "VLAType",
    "ParticulateMatter",
    "TimeReference",
    "QuantityUnit",
    "SolidForm",
    "VentilationMaintenance",
    "FrequencyLevel",
    "ProcedureClass",
    "VentilationClass",
    "DermalSurface",
    "DermalFrequency",
    "RiskLevel",
    "Priority",
    "AlertType",
    "AlertSeverity",
    # Models
    "ChemicalAgent",
    "HierarchyResult",
    "InhalationResult",
    "DermalResult",
    "Alert",
    "InventoryIssue",
    "InventoryValidationResult",
    "AssessmentResult",
]
