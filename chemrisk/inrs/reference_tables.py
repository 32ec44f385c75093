# -*- coding: utf-8 -*-
"""
NTP 937 Reference Tables

Fixed reference data of the INRS simplified chemical-risk methodology
(NTP 937 / ND 2233-200-05) and the small pure functions that read it.
Tables are built once at import time as read-only mappings and are never
mutated; nothing in this module is configurable.

Tables:
    Table 1   R-phrase -> danger class (CP)
    Table 1b  H-phrase -> danger class (CP)
    Table 1c  Special materials -> danger class (CP)
    Table 2   Quantity index -> quantity class (CC)
    Table 4   CC x CF -> potential exposure class (CEP)
    Table 5   CP x CEP -> potential risk class (CRP)
    Table 6   CRP -> potential risk score (PRP)
    Table 8   Vapour pressure -> volatility class
    Figure 2  Boiling point vs working temperature -> volatility class
    Table 10  Volatility class -> score
    Table 11  VLA correction factor (FC)
    Figure 3  Procedure class -> score (PPr)
    Figure 4  Collective protection class -> score (PPC)

Every class lookup is total: a class outside its declared range is
clamped to the nearest bound before the table is read.

Example:
    >>> from chemrisk.inrs import reference_tables as rt
    >>> rt.exposure_class(5, 4)
    5
    >>> rt.risk_score_from_class(rt.risk_class(5, 5))
    10000
    >>> rt.danger_class_from_phrase("H350", rt.PhraseSystem.H)
    5
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from chemrisk.inrs.models import ParticulateMatter, RiskLevel, TimeReference


def _clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(int(value), high))


class PhraseSystem(str, Enum):
    """Phrase vocabulary a code belongs to."""

    R = "r"
    H = "h"


# ---------------------------------------------------------------------------
# Table 1: R-phrases -> danger class
# ---------------------------------------------------------------------------

R_PHRASE_DANGER_CLASS: Mapping[str, int] = MappingProxyType({
    # Class 5
    "R26": 5, "R32": 5, "R39/26": 5, "R39/26/27": 5, "R39/26/27/28": 5,
    "R39/26/28": 5, "R45": 5, "R46": 5, "R49": 5, "R61": 5,
    "R26/27": 5, "R26/28": 5, "R26/27/28": 5,
    # Class 4
    "R23": 4, "R23/24": 4, "R23/25": 4, "R23/24/25": 4,
    "R24": 4, "R24/25": 4, "R25": 4, "R27": 4, "R27/28": 4, "R28": 4,
    "R35": 4, "R39": 4, "R39/23": 4, "R39/23/24": 4,
    "R39/23/24/25": 4, "R39/23/25": 4, "R39/24": 4, "R39/24/25": 4,
    "R39/25": 4, "R39/27": 4, "R39/27/28": 4, "R39/28": 4,
    "R40": 4, "R42": 4, "R42/43": 4, "R48/23": 4,
    "R48/23/24": 4, "R48/23/24/25": 4, "R48/23/25": 4,
    "R48/24": 4, "R48/24/25": 4, "R48/25": 4,
    "R60": 4, "R62": 4, "R63": 4,
    # Class 3
    "R20": 3, "R20/21": 3, "R20/22": 3, "R20/21/22": 3,
    "R21": 3, "R21/22": 3, "R22": 3,
    "R34": 3, "R37": 3, "R41": 3, "R43": 3,
    "R48/20": 3, "R48/20/21": 3, "R48/20/21/22": 3, "R48/20/22": 3,
    "R48/21": 3, "R48/21/22": 3, "R48/22": 3,
    "R68": 3, "R68/20": 3, "R68/20/21": 3, "R68/20/21/22": 3,
    "R68/20/22": 3, "R68/21": 3, "R68/21/22": 3, "R68/22": 3,
    # Class 2
    "R36": 2, "R36/37": 2, "R36/37/38": 2, "R36/38": 2,
    "R38": 2, "R65": 2, "R67": 2,
    # Class 1
    "R33": 1, "R66": 1,
})

# ---------------------------------------------------------------------------
# Table 1b: H-phrases -> danger class
# ---------------------------------------------------------------------------

H_PHRASE_DANGER_CLASS: Mapping[str, int] = MappingProxyType({
    # Class 5
    "H330": 5, "H340": 5, "H350": 5, "H350i": 5, "H360": 5,
    "H360F": 5, "H360D": 5, "H360FD": 5, "H360Fd": 5, "H360Df": 5,
    "H370": 5,
    # Class 4
    "H300": 4, "H301": 4, "H310": 4, "H311": 4, "H314": 4,
    "H331": 4, "H334": 4, "H341": 4, "H351": 4,
    "H361": 4, "H361f": 4, "H361d": 4, "H361fd": 4,
    "H371": 4, "H372": 4, "H300+H310": 4, "H300+H330": 4,
    "H310+H330": 4, "H300+H310+H330": 4,
    # Class 3
    "H302": 3, "H312": 3, "H315": 3, "H317": 3, "H318": 3,
    "H332": 3, "H335": 3, "H336": 3, "H373": 3,
    "H301+H311": 3, "H301+H331": 3, "H311+H331": 3,
    "H301+H311+H331": 3, "H362": 3,
    # Class 2
    "H304": 2, "H315+H319": 2, "H319": 2,
    # Class 1
    "H303": 1, "H313": 1, "H333": 1,
})


def normalize_r_phrase(code: str) -> str:
    """R-phrases are matched trimmed and upper-cased."""
    return code.strip().upper()


def normalize_h_phrase(code: str) -> str:
    """H-phrases are matched trimmed only; suffix case is significant."""
    return code.strip()


def danger_class_from_phrase(
    code: str,
    system: PhraseSystem = PhraseSystem.H,
) -> Optional[int]:
    """Look up the danger class of one hazard phrase.

    Args:
        code: Phrase code as written on the safety data sheet.
        system: Vocabulary the code belongs to.

    Returns:
        Danger class 1-5, or ``None`` when the code is not in the table
        (no contribution, not an error).
    """
    if PhraseSystem(system) is PhraseSystem.R:
        return R_PHRASE_DANGER_CLASS.get(normalize_r_phrase(code))
    return H_PHRASE_DANGER_CLASS.get(normalize_h_phrase(code))


# ---------------------------------------------------------------------------
# Table 1c: Special materials
# ---------------------------------------------------------------------------

ASBESTOS_ID = "amianto"


@dataclass(frozen=True)
class SpecialMaterial:
    """A predefined material whose danger class is fixed by the method."""

    id: str
    name: str
    danger_class: int
    notes: str = ""


SPECIAL_MATERIALS: Tuple[SpecialMaterial, ...] = (
    SpecialMaterial("iron", "Iron (fume/dust)", 2),
    SpecialMaterial("cereal", "Cereal (dust)", 2),
    SpecialMaterial("graphite", "Graphite", 2),
    SpecialMaterial("construction", "Construction material", 2),
    SpecialMaterial("talc", "Talc (asbestos-free)", 3),
    SpecialMaterial("cement", "Portland cement", 3),
    SpecialMaterial("welding_mild", "Welding (mild steel)", 3),
    SpecialMaterial(
        "welding_stainless", "Welding (stainless steel)", 4,
        "Contains chromium VI",
    ),
    SpecialMaterial("welding_galvanized", "Welding (galvanized steel)", 4),
    SpecialMaterial("ceramic_fibers", "Ceramic fibres", 4),
    SpecialMaterial("vegetable_fibers", "Vegetable fibres", 3),
    SpecialMaterial("lead_paint", "Lead paints", 5),
    SpecialMaterial("grinding_wheels", "Grinding wheels", 2),
    SpecialMaterial("sand", "Sands (silica)", 4, "Crystalline silica"),
    SpecialMaterial("cutting_oils", "Cutting oils (mist)", 3),
    SpecialMaterial("softwood", "Softwoods", 3),
    SpecialMaterial("hardwood", "Hardwoods", 4, "Category 1 carcinogen"),
    SpecialMaterial(
        ASBESTOS_ID, "Asbestos", 5,
        "Mandatory quantitative assessment (RD 396/2006)",
    ),
    SpecialMaterial("bitumen", "Bitumen / asphalt", 3),
    SpecialMaterial("gasoline", "Gasoline", 4),
    SpecialMaterial("diesel", "Diesel fuel", 3),
    SpecialMaterial("mineral_wool", "Mineral wool", 2),
    SpecialMaterial("plaster", "Plaster", 2),
    SpecialMaterial("flour", "Flour", 3),
    SpecialMaterial("sugar", "Sugar (dust)", 2),
)

_SPECIAL_MATERIALS_BY_ID: Mapping[str, SpecialMaterial] = MappingProxyType(
    {material.id: material for material in SPECIAL_MATERIALS}
)


def get_special_material(material_id: Optional[str]) -> Optional[SpecialMaterial]:
    """Return the catalogue entry for ``material_id``, or None if unknown."""
    if not material_id:
        return None
    return _SPECIAL_MATERIALS_BY_ID.get(material_id)


# ---------------------------------------------------------------------------
# VLA -> danger class
# ---------------------------------------------------------------------------


def danger_class_from_vla(value: float) -> int:
    """Danger class from a VLA-ED in mg/m3. Lower limit, higher class."""
    if value >= 100:
        return 1
    if value >= 10:
        return 2
    if value >= 1:
        return 3
    if value >= 0.1:
        return 4
    return 5


# ---------------------------------------------------------------------------
# Table 2: quantity index -> quantity class
# ---------------------------------------------------------------------------


def quantity_class_from_index(percent_index: float) -> int:
    """Quantity class from ``Qi / Qmax * 100``."""
    if percent_index < 1:
        return 1
    if percent_index < 5:
        return 2
    if percent_index < 12:
        return 3
    if percent_index < 33:
        return 4
    return 5


# ---------------------------------------------------------------------------
# Table 4: potential exposure matrix (CC rows 1-5, CF columns 0-4)
# ---------------------------------------------------------------------------

EXPOSURE_MATRIX: Tuple[Tuple[int, ...], ...] = (
    # CF: 0  1  2  3  4
    (0, 1, 1, 1, 1),  # CC 1
    (0, 1, 1, 2, 2),  # CC 2
    (0, 1, 2, 3, 3),  # CC 3
    (0, 2, 3, 3, 4),  # CC 4
    (0, 2, 3, 4, 5),  # CC 5
)


def exposure_class(quantity_class: int, frequency_class: int) -> int:
    """Potential exposure class (CEP, 0-5). Frequency 0 always yields 0."""
    if frequency_class <= 0:
        return 0
    row = _clamp(quantity_class, 1, 5) - 1
    col = _clamp(frequency_class, 0, 4)
    return EXPOSURE_MATRIX[row][col]


# ---------------------------------------------------------------------------
# Table 5: potential risk matrix (CP rows 1-5, CEP columns 1-5)
# ---------------------------------------------------------------------------

RISK_MATRIX: Tuple[Tuple[int, ...], ...] = (
    # CEP: 1  2  3  4  5
    (1, 1, 1, 2, 2),  # CP 1
    (1, 1, 2, 2, 3),  # CP 2
    (1, 2, 2, 3, 4),  # CP 3
    (2, 3, 3, 4, 5),  # CP 4
    (3, 4, 4, 5, 5),  # CP 5
)


def risk_class(danger_class: int, exposure: int) -> int:
    """Potential risk class (CRP, 1-5). Exposure 0 maps to class 1."""
    if exposure == 0:
        return 1
    row = _clamp(danger_class, 1, 5) - 1
    col = _clamp(exposure, 1, 5) - 1
    return RISK_MATRIX[row][col]


# ---------------------------------------------------------------------------
# Class -> score tables
# ---------------------------------------------------------------------------

RISK_CLASS_SCORE: Mapping[int, int] = MappingProxyType(
    {1: 1, 2: 10, 3: 100, 4: 1000, 5: 10000}
)

DANGER_CLASS_SCORE: Mapping[int, int] = MappingProxyType(
    {1: 1, 2: 10, 3: 100, 4: 1000, 5: 10000}
)

VOLATILITY_SCORE: Mapping[int, int] = MappingProxyType(
    {1: 1, 2: 10, 3: 100}
)

PROCEDURE_SCORE: Mapping[int, float] = MappingProxyType(
    {1: 0.001, 2: 0.05, 3: 0.5, 4: 1}
)

VENTILATION_SCORE: Mapping[int, float] = MappingProxyType(
    {1: 0.001, 2: 0.1, 3: 0.7, 4: 1, 5: 10}
)


def risk_score_from_class(cls: int) -> int:
    """Potential risk score (PRP) of a risk class."""
    return RISK_CLASS_SCORE[_clamp(cls, 1, 5)]


def danger_class_score(cls: int) -> int:
    """Danger score (PP) of a danger class."""
    return DANGER_CLASS_SCORE[_clamp(cls, 1, 5)]


def volatility_score(cls: int) -> int:
    """Volatility or pulverulence score (PV)."""
    return VOLATILITY_SCORE[_clamp(cls, 1, 3)]


def procedure_score(cls: int) -> float:
    """Procedure score (PPr)."""
    return PROCEDURE_SCORE[_clamp(cls, 1, 4)]


def ventilation_score(cls: int) -> float:
    """Collective protection score (PPC)."""
    return VENTILATION_SCORE[_clamp(cls, 1, 5)]


# ---------------------------------------------------------------------------
# Table 8 / Figure 2: volatility of liquids
# ---------------------------------------------------------------------------


def volatility_from_vapor_pressure(kpa: float) -> int:
    """Volatility class from vapour pressure in kPa."""
    if kpa < 0.5:
        return 1
    if kpa < 25:
        return 2
    return 3


def volatility_from_temperatures(t_boiling: float, t_working: float) -> int:
    """Volatility class from boiling point and working temperature (C).

    Digitisation of Figure 2 in four boiling-point bands. The first three
    bands use the absolute difference ``t_boiling - t_working``; above
    150 C the difference is taken relative to the boiling point.
    """
    if t_working >= t_boiling:
        return 3

    delta = t_boiling - t_working

    if t_boiling <= 50:
        if delta < 5:
            return 3
        if delta < 20:
            return 2
        return 1
    if t_boiling <= 100:
        if delta < 10:
            return 3
        if delta < 40:
            return 2
        return 1
    if t_boiling <= 150:
        if delta < 20:
            return 3
        if delta < 60:
            return 2
        return 1

    ratio = delta / (t_boiling if t_boiling > 0 else 1)
    if ratio < 0.15:
        return 3
    if ratio < 0.45:
        return 2
    return 1


# ---------------------------------------------------------------------------
# Table 11: VLA correction factor
# ---------------------------------------------------------------------------


def adjusted_vla(
    value: Optional[float],
    particulate: ParticulateMatter = ParticulateMatter.NO,
) -> Optional[float]:
    """VLA-ED adjusted for particulate matter (inhalable or respirable / 10)."""
    if value is None:
        return None
    if ParticulateMatter(particulate) is not ParticulateMatter.NO:
        return value / 10
    return value


def vla_correction_factor(adjusted: Optional[float]) -> int:
    """Correction factor FC for an adjusted VLA. No VLA gives 1."""
    if adjusted is None:
        return 1
    if adjusted > 0.1:
        return 1
    if adjusted > 0.01:
        return 10
    if adjusted > 0.001:
        return 30
    return 100


# ---------------------------------------------------------------------------
# Risk characterization
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Characterization:
    """Risk level, action priority and wording for one score."""

    level: RiskLevel
    priority: int
    label: str
    recommendation: str = ""


_INHALATION_CHARACTERIZATION = MappingProxyType({
    RiskLevel.VERY_HIGH: Characterization(
        RiskLevel.VERY_HIGH,
        1,
        "PROBABLY VERY HIGH RISK",
        "Immediate corrective measures are required. See NTP 872 for "
        "applicable preventive measures.",
    ),
    RiskLevel.MODERATE: Characterization(
        RiskLevel.MODERATE,
        2,
        "MODERATE RISK",
        "Corrective measures and/or a more detailed evaluation are "
        "probably needed (measurements according to UNE-EN 689).",
    ),
    RiskLevel.LOW: Characterization(
        RiskLevel.LOW,
        3,
        "A PRIORI LOW RISK",
        "No changes needed. Maintain current conditions and reevaluate "
        "periodically.",
    ),
})

_DERMAL_CHARACTERIZATION = MappingProxyType({
    RiskLevel.VERY_HIGH: Characterization(
        RiskLevel.VERY_HIGH, 1, "VERY HIGH DERMAL RISK",
    ),
    RiskLevel.MODERATE: Characterization(
        RiskLevel.MODERATE, 2, "MODERATE DERMAL RISK",
    ),
    RiskLevel.LOW: Characterization(
        RiskLevel.LOW, 3, "A PRIORI LOW DERMAL RISK",
    ),
})


def risk_level_from_score(score: float) -> RiskLevel:
    """Shared thresholds: >1000 very high, >100 moderate, else low."""
    if score > 1000:
        return RiskLevel.VERY_HIGH
    if score > 100:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def characterize_inhalation_risk(score: float) -> Characterization:
    """Characterize an inhalation risk score (PRI)."""
    return _INHALATION_CHARACTERIZATION[risk_level_from_score(score)]


def characterize_dermal_risk(score: float) -> Characterization:
    """Characterize a dermal risk score (PRD). No recommendation text."""
    return _DERMAL_CHARACTERIZATION[risk_level_from_score(score)]


# ---------------------------------------------------------------------------
# Phrase lists
# ---------------------------------------------------------------------------

DERMAL_R_PHRASES = frozenset({"R21", "R24", "R27", "R34", "R35", "R38", "R43"})
DERMAL_H_PHRASES = frozenset({"H312", "H314", "H315", "H317", "H318"})

CARCINOGENIC_R_PHRASES = frozenset({"R45", "R49", "R46"})
CARCINOGENIC_H_PHRASES = frozenset({"H340", "H350", "H350i"})


# ---------------------------------------------------------------------------
# Table 3: frequency descriptors
# ---------------------------------------------------------------------------

FREQUENCY_DESCRIPTORS: Mapping[TimeReference, Tuple[Tuple[str, str], ...]] = (
    MappingProxyType({
        TimeReference.DAY: (
            ("Not used", ""),
            ("Occasional", "<= 30 min/day"),
            ("Intermittent", "30-120 min/day"),
            ("Frequent", "2-6 h/day"),
            ("Permanent", "> 6 h/day"),
        ),
        TimeReference.WEEK: (
            ("Not used", ""),
            ("Occasional", "<= 2 h/week"),
            ("Intermittent", "2-8 h/week"),
            ("Frequent", "1-3 days/week"),
            ("Permanent", "> 3 days/week"),
        ),
        TimeReference.MONTH: (
            ("Not used", ""),
            ("Occasional", "1 day/month"),
            ("Intermittent", "2-6 days/month"),
            ("Frequent", "7-15 days/month"),
            ("Permanent", "> 15 days/month"),
        ),
        TimeReference.YEAR: (
            ("Not used in the last year (class 0)", ""),
            ("Occasional", "<= 15 days/year"),
            ("Intermittent", "15 days - 2 months/year"),
            ("Frequent", "2-5 months/year"),
            ("Permanent", "> 5 months/year"),
        ),
    })
)


def describe_frequency(
    time_reference: TimeReference,
    level: int,
) -> Tuple[str, str]:
    """Return ``(label, description)`` of a frequency level on a time scale.

    The class value itself does not depend on the time reference; only
    its wall-clock reading does.
    """
    options = FREQUENCY_DESCRIPTORS[TimeReference(time_reference)]
    return options[_clamp(level, 0, 4)]


__all__ = [
    "PhraseSystem",
    "R_PHRASE_DANGER_CLASS",
    "H_PHRASE_DANGER_CLASS",
    "normalize_r_phrase",
    "normalize_h_phrase",
    "danger_class_from_phrase",
    "ASBESTOS_ID",
    "SpecialMaterial",
    "SPECIAL_MATERIALS",
    "get_special_material",
    "danger_class_from_vla",
    "quantity_class_from_index",
    "EXPOSURE_MATRIX",
    "exposure_class",
    "RISK_MATRIX",
    "risk_class",
    "RISK_CLASS_SCORE",
    "DANGER_CLASS_SCORE",
    "VOLATILITY_SCORE",
    "PROCEDURE_SCORE",
    "VENTILATION_SCORE",
    "risk_score_from_class",
    "danger_class_score",
    "volatility_score",
    "procedure_score",
    "ventilation_score",
    "volatility_from_vapor_pressure",
    "volatility_from_temperatures",
    "adjusted_vla",
    "vla_correction_factor",
    "Characterization",
    "risk_level_from_score",
    "characterize_inhalation_risk",
    "characterize_dermal_risk",
    "DERMAL_R_PHRASES",
    "DERMAL_H_PHRASES",
    "CARCINOGENIC_R_PHRASES",
    "CARCINOGENIC_H_PHRASES",
    "FREQUENCY_DESCRIPTORS",
    "describe_frequency",
]
