# -*- coding: utf-8 -*-
"""
Dermal Risk Evaluator - PRD of a chemical agent (NTP 937 Algorithm 3).

    PRD = PP * PS * PFD

PS and PFD are the surface and contact-frequency ordinals themselves
(1, 2, 3, 10 and 1, 2, 5, 10). An agent that is not toxic through the
skin, or has no skin contact, is *not applicable*: the evaluator returns
``None`` and the agent must be left out of dermal statistics rather than
counted as a zero-risk agent.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from chemrisk.inrs.danger_classifier import determine_danger_class
from chemrisk.inrs.models import ChemicalAgent, DermalResult
from chemrisk.inrs.reference_tables import (
    characterize_dermal_risk,
    danger_class_score,
)

logger = logging.getLogger(__name__)


def _ordinal_score(value: Optional[int]) -> int:
    if value is None:
        return 1
    return max(1, min(int(value), 10))


def is_dermal_applicable(agent: ChemicalAgent) -> bool:
    """Dermal evaluation applies only with toxicity and skin contact."""
    return agent.has_dermal_toxicity and agent.has_skin_contact


def evaluate_dermal_risk(agent: ChemicalAgent) -> Optional[DermalResult]:
    """Compute the dermal risk of one agent, or None when not applicable."""
    if not is_dermal_applicable(agent):
        logger.debug("Dermal %s: not applicable", agent.id)
        return None

    cp = determine_danger_class(agent)
    pp = danger_class_score(cp)
    ps = _ordinal_score(agent.dermal_surface)
    pfd = _ordinal_score(agent.dermal_frequency)

    prd = float(pp * ps * pfd)
    char = characterize_dermal_risk(prd)

    logger.debug(
        "Dermal %s: PP=%s PS=%s PFD=%s -> PRD=%s (%s)",
        agent.id,
        pp,
        ps,
        pfd,
        prd,
        char.level.value,
    )

    return DermalResult(
        agent_id=agent.id,
        agent_name=agent.display_name,
        danger_class=cp,
        danger_score=pp,
        surface_score=ps,
        frequency_score=pfd,
        risk_score=prd,
        risk_level=char.level,
        priority_action=char.priority,
        characterization=char.label,
    )


def evaluate_all_dermal(agents: Iterable[ChemicalAgent]) -> List[DermalResult]:
    """Evaluate every applicable agent; not-applicable agents are dropped."""
    results: List[DermalResult] = []
    for agent in agents:
        result = evaluate_dermal_risk(agent)
        if result is not None:
            results.append(result)
    return results


__all__ = ["is_dermal_applicable", "evaluate_dermal_risk", "evaluate_all_dermal"]
