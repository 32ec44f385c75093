# -*- coding: utf-8 -*-
"""
Hierarchization Engine - potential risk ranking (NTP 937 Algorithm 1).

Ranks every agent of an inventory by its potential risk so that the
detailed inhalation and dermal evaluation can focus on the agents that
matter. The computation is map, reduce, map:

    1. Normalize quantities to kg-equivalents (negative or non-finite
       values are 0; g and ml / 1000,
       ton x 1000, kg and l unchanged; density assumed 1).
    2. Reduce: Qmax over the inventory. Quantity index
       Qi / Qmax * 100, or 100 for every agent when Qmax is 0.
    3. Per agent: CP (danger classifier), CC (Table 2), CF (the
       frequency level as-is), CEP (Table 4), CRP (Table 5, CEP 0 maps
       to 1) and PRP (Table 6).
    4. Reduce: total PRP. IPA = PRP / total * 100, 0 when total is 0.
    5. Priority: HIGH if PRP > 10000 or (CP >= 4 and PRP >= 10000),
       MEDIUM if PRP > 100, else LOW.
    6. Stable sort by priority, then CP descending, then PRP descending.

Pareto interpretation:
    Taken in ranked order, the agents whose cumulative IPA first reaches
    the threshold (80% by default) are the priority set proposed for
    detailed evaluation.

Example:
    >>> from chemrisk.inrs.models import ChemicalAgent
    >>> from chemrisk.inrs.hierarchy import compute_hierarchy, pareto_agents
    >>> results = compute_hierarchy([
    ...     ChemicalAgent(id="a", h_phrases=["H350"], quantity=100,
    ...                   frequency_level=4),
    ...     ChemicalAgent(id="b", h_phrases=["H319"], quantity=1,
    ...                   frequency_level=1),
    ... ])
    >>> [r.agent_id for r in pareto_agents(results)]
    ['a']
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from chemrisk.inrs.danger_classifier import determine_danger_class
from chemrisk.inrs.models import (
    ChemicalAgent,
    HierarchyResult,
    Priority,
    QuantityUnit,
)
from chemrisk.inrs.reference_tables import (
    exposure_class,
    quantity_class_from_index,
    risk_class,
    risk_score_from_class,
)

logger = logging.getLogger(__name__)

#: Cumulative IPA percentage delimiting the Pareto priority set.
DEFAULT_PARETO_THRESHOLD = 80.0

_PER_THOUSAND_UNITS = frozenset({QuantityUnit.G, QuantityUnit.ML})

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


# ---------------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------------


def normalize_quantity(agent: ChemicalAgent) -> float:
    """Quantity of ``agent`` in kg-equivalents.

    Negative and non-finite values (NaN, inf) become 0.
    """
    quantity = agent.quantity
    if not math.isfinite(quantity) or quantity < 0:
        return 0.0
    if agent.quantity_unit in _PER_THOUSAND_UNITS:
        return quantity / 1000
    if agent.quantity_unit == QuantityUnit.TON:
        return quantity * 1000
    return quantity


def quantity_index(quantity: float, max_quantity: float) -> float:
    """Percent index of ``quantity`` against the inventory maximum."""
    if max_quantity <= 0:
        return 100.0
    return quantity / max_quantity * 100


def assign_priority(risk_score: float, danger_class: int) -> Priority:
    """Priority tier of a potential risk score."""
    if risk_score > 10000 or (danger_class >= 4 and risk_score >= 10000):
        return Priority.HIGH
    if risk_score > 100:
        return Priority.MEDIUM
    return Priority.LOW


def _rank_key(result: HierarchyResult) -> Tuple[int, int, float]:
    return (
        _PRIORITY_ORDER[result.priority],
        -result.danger_class,
        -result.risk_score,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_hierarchy(agents: Iterable[ChemicalAgent]) -> List[HierarchyResult]:
    """Rank ``agents`` by potential risk.

    Args:
        agents: Inventory to rank. Order is not significant.

    Returns:
        One :class:`HierarchyResult` per agent in ranked order, with
        ``ipa_percent`` and ``cumulative_percent`` filled in. An empty
        inventory yields an empty list.
    """
    agents = list(agents)
    if not agents:
        return []

    quantities = [normalize_quantity(agent) for agent in agents]
    max_quantity = max(quantities)

    rows = []
    for agent, quantity in zip(agents, quantities):
        cp = determine_danger_class(agent)
        cc = quantity_class_from_index(quantity_index(quantity, max_quantity))
        cf = agent.frequency_level
        cep = exposure_class(cc, cf)
        crp = 1 if cep == 0 else risk_class(cp, cep)
        prp = float(risk_score_from_class(crp))
        rows.append((agent, cp, cc, cf, cep, crp, prp))

    total = sum(row[-1] for row in rows)

    unranked = [
        HierarchyResult(
            agent_id=agent.id,
            agent_name=agent.display_name,
            danger_class=cp,
            quantity_class=cc,
            frequency_class=cf,
            potential_exposure_class=cep,
            potential_risk_class=crp,
            risk_score=prp,
            ipa_percent=(prp / total * 100) if total > 0 else 0.0,
            priority=assign_priority(prp, cp),
        )
        for agent, cp, cc, cf, cep, crp, prp in rows
    ]
    ranked = sorted(unranked, key=_rank_key)

    results: List[HierarchyResult] = []
    cumulative = 0.0
    for result in ranked:
        cumulative += result.ipa_percent
        results.append(
            result.model_copy(update={"cumulative_percent": cumulative})
        )

    logger.info(
        "Hierarchy computed: agents=%d, total_score=%s, high=%d, medium=%d",
        len(results),
        total,
        sum(1 for r in results if r.priority == Priority.HIGH),
        sum(1 for r in results if r.priority == Priority.MEDIUM),
    )
    return results


def pareto_agents(
    results: Sequence[HierarchyResult],
    threshold: float = DEFAULT_PARETO_THRESHOLD,
) -> List[HierarchyResult]:
    """Leading results whose cumulative IPA first reaches ``threshold``.

    ``results`` must be in ranked order, as returned by
    :func:`compute_hierarchy`. When the total risk score is 0 the Pareto
    set is empty.
    """
    total = sum(r.risk_score for r in results)
    if total <= 0:
        return []

    selected: List[HierarchyResult] = []
    cumulative = 0.0
    for result in results:
        selected.append(result)
        cumulative += result.risk_score / total * 100
        if cumulative >= threshold:
            break
    return selected


def select_for_detailed_evaluation(
    results: Sequence[HierarchyResult],
    agent_ids: Optional[Iterable[str]] = None,
    threshold: float = DEFAULT_PARETO_THRESHOLD,
) -> List[HierarchyResult]:
    """Return copies of ``results`` with ``selected`` set.

    Args:
        results: Ranked hierarchization results.
        agent_ids: Agents chosen explicitly. When None, the Pareto set
            for ``threshold`` is selected.
        threshold: Cumulative IPA percentage for the default selection.

    Returns:
        Same length and order as ``results``.
    """
    if agent_ids is None:
        chosen = {r.agent_id for r in pareto_agents(results, threshold)}
    else:
        chosen = set(agent_ids)

    return [
        r.model_copy(update={"selected": r.agent_id in chosen})
        for r in results
    ]


__all__ = [
    "DEFAULT_PARETO_THRESHOLD",
    "normalize_quantity",
    "quantity_index",
    "assign_priority",
    "compute_hierarchy",
    "pareto_agents",
    "select_for_detailed_evaluation",
]
