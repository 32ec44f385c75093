# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import itertools

import pytest

from chemrisk.inrs.config import InrsConfig, reset_config
from chemrisk.inrs.models import ChemicalAgent
from chemrisk.inrs.provenance import ProvenanceTracker
from chemrisk.inrs.setup import ChemicalRiskService, reset_service


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Every test starts from a fresh config and service singleton."""
    reset_config()
    reset_service()
    yield
    reset_config()
    reset_service()


@pytest.fixture
def make_agent():
    """Factory for ChemicalAgent records with sensible defaults."""
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        fields = {
            "id": f"agent-{n}",
            "commercial_name": f"Product {n}",
        }
        fields.update(overrides)
        return ChemicalAgent(**fields)

    return _make


@pytest.fixture
def ether_like_agent(make_agent):
    """H350 liquid boiling at 56 C used at 20 C, dispersive, no ventilation."""
    return make_agent(
        id="ether",
        h_phrases=["H350"],
        physical_state="liquid",
        boiling_point=56,
        working_temperature=20,
        procedure_class=4,
        ventilation_class=4,
    )


@pytest.fixture
def ranked_trio(make_agent):
    """Three class-5 agents whose potential risk scores are 10000, 1000, 100."""
    return [
        make_agent(id="c", h_phrases=["H350"], quantity=10, frequency_level=1),
        make_agent(id="a", h_phrases=["H350"], quantity=100, frequency_level=4),
        make_agent(id="b", h_phrases=["H350"], quantity=100, frequency_level=1),
    ]


@pytest.fixture
def service():
    """Service with an isolated config and provenance tracker."""
    config = InrsConfig()
    return ChemicalRiskService(
        config=config,
        provenance=ProvenanceTracker(genesis_hash=config.genesis_hash),
    )
