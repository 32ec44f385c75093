# -*- coding: utf-8 -*-
"""
Alert Generator - regulatory special cases flagged from agent data.

Alerts are pure predicate checks over a single agent. They annotate an
assessment and never change any score. At most one alert is raised per
``(agent_id, alert_type)``; its id is ``"<agent_id>-<suffix>"``.

    AMIANTO          critical  asbestos selected as special material
    CARCINOGENIC     critical  carcinogen / mutagen cat. 1A/1B phrase
    FIV              warning   FIV notation, vapour and particulate basis
    LOW_VLA          warning   adjusted VLA <= 0.1 mg/m3
    TEMP_EXCEEDS_BP  warning   working temperature above boiling point
    CONFINED_SPACE   critical  ventilation class 5
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from chemrisk.inrs.models import (
    Alert,
    AlertSeverity,
    AlertType,
    ChemicalAgent,
    VentilationClass,
)
from chemrisk.inrs.reference_tables import (
    ASBESTOS_ID,
    CARCINOGENIC_H_PHRASES,
    CARCINOGENIC_R_PHRASES,
    adjusted_vla,
    normalize_h_phrase,
    normalize_r_phrase,
    vla_correction_factor,
)

logger = logging.getLogger(__name__)

#: Adjusted VLA (mg/m3) at or below which a correction factor applies.
LOW_VLA_THRESHOLD = 0.1

_ID_SUFFIX = {
    AlertType.AMIANTO: "amianto",
    AlertType.CARCINOGENIC: "carcinogenic",
    AlertType.FIV: "fiv",
    AlertType.LOW_VLA: "low-vla",
    AlertType.TEMP_EXCEEDS_BP: "temp",
    AlertType.CONFINED_SPACE: "confined",
}


def _alert(
    agent: ChemicalAgent,
    alert_type: AlertType,
    severity: AlertSeverity,
    title: str,
    message: str,
) -> Alert:
    return Alert(
        id=f"{agent.id}-{_ID_SUFFIX[alert_type]}",
        agent_id=agent.id,
        agent_name=agent.display_name,
        type=alert_type,
        title=title,
        message=message,
        severity=severity,
    )


def is_carcinogenic(agent: ChemicalAgent) -> bool:
    """True when a phrase of ``agent`` is on the carcinogen/mutagen list."""
    if any(normalize_r_phrase(p) in CARCINOGENIC_R_PHRASES for p in agent.r_phrases):
        return True
    return any(
        normalize_h_phrase(p) in CARCINOGENIC_H_PHRASES for p in agent.h_phrases
    )


def generate_alerts(agent: ChemicalAgent) -> List[Alert]:
    """Return every alert that applies to ``agent``."""
    alerts: List[Alert] = []

    if agent.is_special_material and agent.special_material_id == ASBESTOS_ID:
        alerts.append(_alert(
            agent,
            AlertType.AMIANTO,
            AlertSeverity.CRITICAL,
            "ASBESTOS DETECTED",
            "This agent requires a mandatory quantitative assessment "
            "(RD 396/2006). The simplified method is NOT applicable.",
        ))

    if is_carcinogenic(agent):
        alerts.append(_alert(
            agent,
            AlertType.CARCINOGENIC,
            AlertSeverity.CRITICAL,
            "CARCINOGEN / MUTAGEN",
            "See the RD 665/97 technical guide. A detailed quantitative "
            "assessment is recommended.",
        ))

    if agent.has_fiv:
        alerts.append(_alert(
            agent,
            AlertType.FIV,
            AlertSeverity.WARNING,
            "FIV NOTATION",
            "Simultaneous vapour and particulate exposure. Both "
            "volatilities are assessed according to Table 8.",
        ))

    if agent.has_vla and agent.vla_ed is not None:
        vla_adj = adjusted_vla(agent.vla_ed, agent.particulate_matter)
        if vla_adj <= LOW_VLA_THRESHOLD:
            fc = vla_correction_factor(vla_adj)
            alerts.append(_alert(
                agent,
                AlertType.LOW_VLA,
                AlertSeverity.WARNING,
                "VERY LOW VLA",
                f"Adjusted VLA = {vla_adj:.4f} mg/m3. Correction factor "
                f"FC = {fc} has been applied automatically.",
            ))

    if (
        agent.boiling_point is not None
        and agent.working_temperature is not None
        and agent.working_temperature > agent.boiling_point
    ):
        alerts.append(_alert(
            agent,
            AlertType.TEMP_EXCEEDS_BP,
            AlertSeverity.WARNING,
            "WORKING TEMPERATURE > BOILING POINT",
            "Check the data: the working temperature cannot exceed the "
            "boiling point in normal processes.",
        ))

    if agent.ventilation_class == VentilationClass.CONFINED_SPACE:
        alerts.append(_alert(
            agent,
            AlertType.CONFINED_SPACE,
            AlertSeverity.CRITICAL,
            "CONFINED SPACE",
            "Hazardous confinement situation. Review measures urgently. "
            "Protection factor PPC = 10 applied.",
        ))

    if alerts:
        logger.debug(
            "Agent %s raised %d alert(s): %s",
            agent.id,
            len(alerts),
            ", ".join(a.type.value for a in alerts),
        )
    return alerts


def generate_all_alerts(agents: Iterable[ChemicalAgent]) -> List[Alert]:
    """Alerts of every agent, grouped by agent in input order."""
    alerts: List[Alert] = []
    for agent in agents:
        alerts.extend(generate_alerts(agent))
    return alerts


__all__ = [
    "LOW_VLA_THRESHOLD",
    "is_carcinogenic",
    "generate_alerts",
    "generate_all_alerts",
]
