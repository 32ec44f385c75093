# -*- coding: utf-8 -*-
"""
Inhalation Risk Evaluator - PRI of a chemical agent (NTP 937 Algorithm 2).

Risk Score Formula:
    PRI = PP * PV * PPr * PPC * FC

    Where:
        - PP  = danger score of the danger class (1 .. 10000)
        - PV  = volatility / pulverulence score (1, 10, 100)
        - PPr = procedure score (0.001 .. 1)
        - PPC = collective protection score (0.001 .. 10)
        - FC  = VLA correction factor (1, 10, 30, 100)

The product is kept unrounded. Characterization:

    VERY_HIGH:  PRI > 1000   priority 1
    MODERATE:   PRI > 100    priority 2
    LOW:        otherwise    priority 3

Every branch has a default, so evaluation never raises for a valid
:class:`~chemrisk.inrs.models.ChemicalAgent`.

Example:
    >>> from chemrisk.inrs.models import ChemicalAgent
    >>> from chemrisk.inrs.inhalation import evaluate_inhalation_risk
    >>> agent = ChemicalAgent(
    ...     id="acetone",
    ...     h_phrases=["H350"],
    ...     boiling_point=56,
    ...     working_temperature=20,
    ...     procedure_class=4,
    ...     ventilation_class=4,
    ... )
    >>> result = evaluate_inhalation_risk(agent)
    >>> result.risk_score, result.risk_level.value
    (100000.0, 'very_high')
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from chemrisk.inrs.danger_classifier import determine_danger_class
from chemrisk.inrs.models import ChemicalAgent, InhalationResult
from chemrisk.inrs.reference_tables import (
    adjusted_vla,
    characterize_inhalation_risk,
    danger_class_score,
    procedure_score,
    ventilation_score,
    vla_correction_factor,
    volatility_score,
)
from chemrisk.inrs.volatility_classifier import determine_volatility_class

logger = logging.getLogger(__name__)


def agent_vla_correction_factor(agent: ChemicalAgent) -> int:
    """Correction factor FC of ``agent``; 1 without a declared VLA-ED."""
    if not agent.has_vla or agent.vla_ed is None:
        return 1
    return vla_correction_factor(
        adjusted_vla(agent.vla_ed, agent.particulate_matter)
    )


def evaluate_inhalation_risk(agent: ChemicalAgent) -> InhalationResult:
    """Compute the inhalation risk of one agent."""
    cp = determine_danger_class(agent)
    pp = danger_class_score(cp)

    cv = determine_volatility_class(agent)
    pv = volatility_score(cv)

    ppr = procedure_score(agent.procedure_class)
    ppc = ventilation_score(agent.ventilation_class)
    fc = agent_vla_correction_factor(agent)

    pri = float(pp * pv * ppr * ppc * fc)
    char = characterize_inhalation_risk(pri)

    logger.debug(
        "Inhalation %s: PP=%s PV=%s PPr=%s PPC=%s FC=%s -> PRI=%s (%s)",
        agent.id,
        pp,
        pv,
        ppr,
        ppc,
        fc,
        pri,
        char.level.value,
    )

    return InhalationResult(
        agent_id=agent.id,
        agent_name=agent.display_name,
        danger_class=cp,
        danger_score=pp,
        volatility_class=cv,
        volatility_score=pv,
        procedure_class=agent.procedure_class,
        procedure_score=ppr,
        protection_class=agent.ventilation_class,
        protection_score=ppc,
        vla_correction_factor=fc,
        risk_score=pri,
        risk_level=char.level,
        priority_action=char.priority,
        characterization=char.label,
        recommendation=char.recommendation,
    )


def evaluate_all_inhalation(agents: Iterable[ChemicalAgent]) -> List[InhalationResult]:
    """Evaluate inhalation risk for each agent, preserving input order."""
    return [evaluate_inhalation_risk(agent) for agent in agents]


__all__ = [
    "agent_vla_correction_factor",
    "evaluate_inhalation_risk",
    "evaluate_all_inhalation",
]
