# -*- coding: utf-8 -*-
"""Volatility / pulverulence classifier tests."""

import pytest

from chemrisk.inrs.volatility_classifier import (
    DEFAULT_VOLATILITY_CLASS,
    determine_volatility_class,
)


class TestGasesAndSolids:
    @pytest.mark.parametrize("state", ["gas", "aerosol"])
    def test_gas_and_aerosol_are_class_three(self, make_agent, state):
        """Gases and aerosols are always maximally volatile."""
        agent = make_agent(physical_state=state, boiling_point=200, working_temperature=20)
        assert determine_volatility_class(agent) == 3

    @pytest.mark.parametrize("form,expected", [
        ("fine_powder", 3),
        ("grain_powder", 2),
        ("pellets", 1),
        (None, 1),
    ])
    def test_solid_pulverulence(self, make_agent, form, expected):
        """Solids are classed by granulometry."""
        agent = make_agent(physical_state="solid", solid_form=form)
        assert determine_volatility_class(agent) == expected


class TestLiquids:
    def test_spray_wins(self, make_agent):
        """Spraying gives class 3 whatever the temperatures."""
        agent = make_agent(is_spray=True, boiling_point=300, working_temperature=20)
        assert determine_volatility_class(agent) == 3

    def test_fiv_uses_vapor_pressure(self, make_agent):
        """With FIV and a vapour pressure, temperatures are ignored."""
        agent = make_agent(
            has_fiv=True,
            vapor_pressure=0.1,
            boiling_point=50,
            working_temperature=60,
        )
        assert determine_volatility_class(agent) == 1

    def test_fiv_without_vapor_pressure_uses_temperatures(self, make_agent):
        """FIV alone does not bypass the temperature rule."""
        agent = make_agent(has_fiv=True, boiling_point=56, working_temperature=20)
        assert determine_volatility_class(agent) == 2

    def test_temperature_rule(self, make_agent):
        """Boiling point 56 C used at 20 C is medium volatility."""
        agent = make_agent(boiling_point=56, working_temperature=20)
        assert determine_volatility_class(agent) == 2

    @pytest.mark.parametrize("boiling,working", [
        (None, None),
        (56, None),
        (None, 20),
    ])
    def test_insufficient_data_is_neutral(self, make_agent, boiling, working):
        """A liquid without both temperatures gets the middle class."""
        agent = make_agent(boiling_point=boiling, working_temperature=working)
        assert determine_volatility_class(agent) == DEFAULT_VOLATILITY_CLASS == 2


class TestBounds:
    @pytest.mark.parametrize("state", ["solid", "liquid", "gas", "aerosol"])
    @pytest.mark.parametrize("boiling,working", [(-40, 20), (20, -40), (500, 0), (0, 0)])
    def test_class_always_in_range(self, make_agent, state, boiling, working):
        """Every reachable input gives a class between 1 and 3."""
        agent = make_agent(
            physical_state=state,
            boiling_point=boiling,
            working_temperature=working,
            solid_form="grain_powder" if state == "solid" else None,
        )
        assert 1 <= determine_volatility_class(agent) <= 3
