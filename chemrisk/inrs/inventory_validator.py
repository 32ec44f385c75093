# -*- coding: utf-8 -*-
"""
Inventory Validator - completeness checks run before an assessment.

The scoring engine accepts any well-typed agent and falls back to
defaults for missing data. These checks are what an input form enforces
before it hands the inventory to the engine:

    - the inventory holds at least one agent
    - every agent has a commercial name
    - a labelled agent declares an R/H phrase or a special material
    - the quantity is a finite number greater than 0
    - a liquid declares its boiling point
    - a solid declares its form
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List

from chemrisk.inrs.models import (
    ChemicalAgent,
    InventoryIssue,
    InventoryValidationResult,
    LabelingSystem,
    PhysicalState,
)

logger = logging.getLogger(__name__)


def _agent_issues(agent: ChemicalAgent, position: int) -> List[InventoryIssue]:
    label = agent.commercial_name or f"Agent {position}"
    issues: List[InventoryIssue] = []

    def add(field: str, message: str) -> None:
        issues.append(InventoryIssue(
            agent_id=agent.id,
            field=field,
            message=f"{label}: {message}",
        ))

    if not agent.commercial_name.strip():
        add("commercial_name", "commercial name is required.")

    if agent.labeling_system != LabelingSystem.NONE:
        if not agent.r_phrases and not agent.h_phrases and not agent.is_special_material:
            add(
                "h_phrases",
                "declare at least one R/H phrase or a special material.",
            )

    if not math.isfinite(agent.quantity) or agent.quantity <= 0:
        add("quantity", "quantity must be greater than 0.")

    if agent.physical_state == PhysicalState.LIQUID and agent.boiling_point is None:
        add("boiling_point", "boiling point is required for liquids.")

    if agent.physical_state == PhysicalState.SOLID and agent.solid_form is None:
        add("solid_form", "select the form of the solid.")

    return issues


def validate_inventory(agents: Iterable[ChemicalAgent]) -> InventoryValidationResult:
    """Check that an inventory is complete enough to assess.

    Returns:
        Result listing every issue found, in agent order. Never raises;
        call :meth:`InventoryValidationResult.raise_for_errors` to turn
        issues into an :class:`~chemrisk.exceptions.InventoryValidationError`.
    """
    agents = list(agents)
    if not agents:
        return InventoryValidationResult(issues=[
            InventoryIssue(field="agents", message="Add at least one chemical agent."),
        ])

    issues: List[InventoryIssue] = []
    for position, agent in enumerate(agents, start=1):
        issues.extend(_agent_issues(agent, position))

    if issues:
        logger.warning(
            "Inventory validation found %d issue(s) across %d agent(s)",
            len(issues),
            len({i.agent_id for i in issues}),
        )
    return InventoryValidationResult(issues=issues)


__all__ = ["validate_inventory"]
