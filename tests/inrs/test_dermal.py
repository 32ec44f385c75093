# -*- coding: utf-8 -*-
"""Dermal risk evaluator tests."""

import pytest

from chemrisk.inrs.dermal import (
    evaluate_all_dermal,
    evaluate_dermal_risk,
    is_dermal_applicable,
)
from chemrisk.inrs.models import DermalFrequency, DermalSurface, RiskLevel


class TestApplicability:
    @pytest.mark.parametrize("toxic,contact", [
        (False, False),
        (True, False),
        (False, True),
    ])
    def test_not_applicable(self, make_agent, toxic, contact):
        """Both toxicity and skin contact are required."""
        agent = make_agent(
            h_phrases=["H312"],
            has_dermal_toxicity=toxic,
            has_skin_contact=contact,
            dermal_surface=DermalSurface.EXTENSIVE_SURFACE,
            dermal_frequency=DermalFrequency.PERMANENT,
        )
        assert is_dermal_applicable(agent) is False
        assert evaluate_dermal_risk(agent) is None

    def test_applicable(self, make_agent):
        """Toxic agent with skin contact is scored."""
        agent = make_agent(has_dermal_toxicity=True, has_skin_contact=True)
        assert is_dermal_applicable(agent) is True
        assert evaluate_dermal_risk(agent) is not None


class TestScore:
    def test_score_is_product(self, make_agent):
        """100 x 10 x 5 = 5000, very high."""
        result = evaluate_dermal_risk(make_agent(
            h_phrases=["H312"],
            has_dermal_toxicity=True,
            has_skin_contact=True,
            dermal_surface=DermalSurface.EXTENSIVE_SURFACE,
            dermal_frequency=DermalFrequency.FREQUENT,
        ))
        assert result.danger_score == 100
        assert result.surface_score == 10
        assert result.frequency_score == 5
        assert result.risk_score == 5000
        assert result.risk_score == (
            result.danger_score * result.surface_score * result.frequency_score
        )
        assert result.risk_level == RiskLevel.VERY_HIGH
        assert result.priority_action == 1

    def test_missing_surface_and_frequency_default_to_one(self, make_agent):
        """Unset ordinals multiply by 1."""
        result = evaluate_dermal_risk(make_agent(
            h_phrases=["H314"],
            has_dermal_toxicity=True,
            has_skin_contact=True,
        ))
        assert result.surface_score == 1
        assert result.frequency_score == 1
        assert result.risk_score == 1000
        assert result.risk_level == RiskLevel.MODERATE

    def test_ordinals_are_clamped(self, make_agent):
        """Surface and frequency stay within 1-10."""
        result = evaluate_dermal_risk(make_agent(
            has_dermal_toxicity=True,
            has_skin_contact=True,
            dermal_surface=20,
            dermal_frequency=0,
        ))
        assert result.surface_score == 10
        assert result.frequency_score == 1

    @pytest.mark.parametrize("phrase,surface,frequency,level", [
        ("H312", 2, 1, RiskLevel.MODERATE),
        ("H303", 3, 2, RiskLevel.LOW),
        ("H319", 10, 1, RiskLevel.LOW),
        ("H319", 10, 10, RiskLevel.MODERATE),
        ("H350", 1, 1, RiskLevel.VERY_HIGH),
    ])
    def test_characterization(self, make_agent, phrase, surface, frequency, level):
        """Dermal tiers mirror the inhalation thresholds."""
        result = evaluate_dermal_risk(make_agent(
            h_phrases=[phrase],
            has_dermal_toxicity=True,
            has_skin_contact=True,
            dermal_surface=surface,
            dermal_frequency=frequency,
        ))
        assert result.risk_level == level
        assert "DERMAL" in result.characterization


class TestBatch:
    def test_not_applicable_agents_are_dropped(self, make_agent):
        """Only applicable agents appear in the batch output."""
        agents = [
            make_agent(id="skin", has_dermal_toxicity=True, has_skin_contact=True),
            make_agent(id="no-contact", has_dermal_toxicity=True),
            make_agent(id="not-toxic", has_skin_contact=True),
        ]
        results = evaluate_all_dermal(agents)
        assert [r.agent_id for r in results] == ["skin"]
