# -*- coding: utf-8 -*-
"""
Danger Classifier - INRS hazard class (CP) of a chemical agent.

The danger class is the maximum of every candidate the agent supplies:

    - each R-phrase found in Table 1 (trimmed, upper-cased)
    - each H-phrase found in Table 1b (trimmed, case-sensitive)
    - the VLA-derived class, when a VLA-ED value is declared
    - the fixed class of a known special material

An agent with no candidate falls back to class 1. Unknown phrases and
unknown special-material ids contribute nothing; they are not errors.

The module also exposes the dermal-toxicity auto-detection used by the
service when ``derive_dermal_toxicity`` is enabled.

Example:
    >>> from chemrisk.inrs.models import ChemicalAgent
    >>> from chemrisk.inrs.danger_classifier import determine_danger_class
    >>> determine_danger_class(ChemicalAgent(id="a1", h_phrases=["H350"]))
    5
"""

from __future__ import annotations

import logging
from typing import List

from chemrisk.inrs.models import ChemicalAgent
from chemrisk.inrs.reference_tables import (
    DERMAL_H_PHRASES,
    DERMAL_R_PHRASES,
    H_PHRASE_DANGER_CLASS,
    R_PHRASE_DANGER_CLASS,
    danger_class_from_vla,
    danger_class_score,
    get_special_material,
    normalize_h_phrase,
    normalize_r_phrase,
)

logger = logging.getLogger(__name__)

#: Class assigned when an agent supplies no hazard information at all.
DEFAULT_DANGER_CLASS = 1


def danger_class_candidates(agent: ChemicalAgent) -> List[int]:
    """Collect every danger class the agent's data contributes."""
    candidates: List[int] = []

    for phrase in agent.r_phrases:
        cls = R_PHRASE_DANGER_CLASS.get(normalize_r_phrase(phrase))
        if cls is not None:
            candidates.append(cls)

    for phrase in agent.h_phrases:
        cls = H_PHRASE_DANGER_CLASS.get(normalize_h_phrase(phrase))
        if cls is not None:
            candidates.append(cls)

    # Raw ED value; the particulate adjustment only feeds the correction factor.
    if agent.has_vla and agent.vla_ed is not None:
        candidates.append(danger_class_from_vla(agent.vla_ed))

    if agent.is_special_material:
        material = get_special_material(agent.special_material_id)
        if material is not None:
            candidates.append(material.danger_class)

    return candidates


def determine_danger_class(agent: ChemicalAgent) -> int:
    """Return the danger class (1-5) of ``agent``."""
    candidates = danger_class_candidates(agent)
    if not candidates:
        logger.debug(
            "Agent %s has no hazard data, danger class defaults to %d",
            agent.id,
            DEFAULT_DANGER_CLASS,
        )
        return DEFAULT_DANGER_CLASS

    cls = max(candidates)
    logger.debug(
        "Agent %s danger class %d from %d candidate(s)",
        agent.id,
        cls,
        len(candidates),
    )
    return cls


def danger_score(agent: ChemicalAgent) -> int:
    """Danger score (PP) of ``agent``: 1, 10, 100, 1000 or 10000."""
    return danger_class_score(determine_danger_class(agent))


def has_dermal_toxicity_phrases(agent: ChemicalAgent) -> bool:
    """True when any phrase of ``agent`` indicates toxicity through the skin."""
    if any(normalize_r_phrase(p) in DERMAL_R_PHRASES for p in agent.r_phrases):
        return True
    return any(normalize_h_phrase(p) in DERMAL_H_PHRASES for p in agent.h_phrases)


def with_derived_dermal_toxicity(agent: ChemicalAgent) -> ChemicalAgent:
    """Return ``agent`` with ``has_dermal_toxicity`` set from its phrases.

    A flag already set is never cleared. The same instance is returned
    when nothing changes.
    """
    if agent.has_dermal_toxicity or not has_dermal_toxicity_phrases(agent):
        return agent
    logger.debug("Agent %s: dermal toxicity derived from phrases", agent.id)
    return agent.model_copy(update={"has_dermal_toxicity": True})


__all__ = [
    "DEFAULT_DANGER_CLASS",
    "danger_class_candidates",
    "determine_danger_class",
    "danger_score",
    "has_dermal_toxicity_phrases",
    "with_derived_dermal_toxicity",
]
