# -*- coding: utf-8 -*-
"""
Volatility Classifier - volatility / pulverulence class (1-3).

Gas and aerosol are always class 3. Solids are classed by granulometry.
Liquids are classed, in order of precedence, by spraying, by vapour
pressure when the FIV notation applies, or by boiling point against
working temperature (Figure 2). A liquid without enough data gets the
middle class 2, as does any other state.
"""

from __future__ import annotations

import logging

from chemrisk.inrs.models import ChemicalAgent, PhysicalState, SolidForm
from chemrisk.inrs.reference_tables import (
    volatility_from_temperatures,
    volatility_from_vapor_pressure,
)

logger = logging.getLogger(__name__)

#: Class used when a liquid lacks the data to be classified.
DEFAULT_VOLATILITY_CLASS = 2


def _solid_pulverulence(agent: ChemicalAgent) -> int:
    if agent.solid_form == SolidForm.FINE_POWDER:
        return 3
    if agent.solid_form == SolidForm.GRAIN_POWDER:
        return 2
    return 1


def _liquid_volatility(agent: ChemicalAgent) -> int:
    if agent.is_spray:
        return 3
    if agent.has_fiv and agent.vapor_pressure is not None:
        return volatility_from_vapor_pressure(agent.vapor_pressure)
    if agent.boiling_point is not None and agent.working_temperature is not None:
        return volatility_from_temperatures(
            agent.boiling_point, agent.working_temperature
        )
    logger.debug(
        "Agent %s: liquid without temperature data, volatility class %d",
        agent.id,
        DEFAULT_VOLATILITY_CLASS,
    )
    return DEFAULT_VOLATILITY_CLASS


def determine_volatility_class(agent: ChemicalAgent) -> int:
    """Return the volatility or pulverulence class (1-3) of ``agent``."""
    state = agent.physical_state
    if state in (PhysicalState.GAS, PhysicalState.AEROSOL):
        return 3
    if state == PhysicalState.SOLID:
        return _solid_pulverulence(agent)
    if state == PhysicalState.LIQUID:
        return _liquid_volatility(agent)
    return DEFAULT_VOLATILITY_CLASS


__all__ = ["DEFAULT_VOLATILITY_CLASS", "determine_volatility_class"]
