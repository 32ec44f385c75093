# -*- coding: utf-8 -*-
"""
Alert Generator Tests

This test suite validates:
- One alert per (agent, type) with ids "<agent_id>-<suffix>"
- Asbestos, carcinogen, FIV, low VLA, temperature and confinement checks
- Alerts never change the scores they annotate
"""

import pytest

from chemrisk.inrs.alerts import generate_alerts, generate_all_alerts, is_carcinogenic
from chemrisk.inrs.danger_classifier import determine_danger_class
from chemrisk.inrs.models import AlertSeverity, AlertType


def _types(alerts):
    return [a.type for a in alerts]


# ==================== ASBESTOS ====================

class TestAsbestos:
    def test_single_critical_alert(self, make_agent):
        """Asbestos raises exactly one critical alert and class 5."""
        agent = make_agent(
            id="roof",
            is_special_material=True,
            special_material_id="amianto",
        )
        alerts = generate_alerts(agent)

        assert _types(alerts) == [AlertType.AMIANTO]
        assert alerts[0].severity == AlertSeverity.CRITICAL
        assert alerts[0].id == "roof-amianto"
        assert determine_danger_class(agent) == 5

    def test_requires_special_material_flag(self, make_agent):
        """The id alone does not raise the alert."""
        agent = make_agent(is_special_material=False, special_material_id="amianto")
        assert AlertType.AMIANTO not in _types(generate_alerts(agent))

    def test_other_special_materials(self, make_agent):
        """Only asbestos is flagged."""
        agent = make_agent(is_special_material=True, special_material_id="cement")
        assert generate_alerts(agent) == []


# ==================== CARCINOGENS ====================

class TestCarcinogenic:
    @pytest.mark.parametrize("r_phrases,h_phrases,expected", [
        (["R45"], [], True),
        (["r49"], [], True),
        (["R46"], [], True),
        ([], ["H350"], True),
        ([], ["H340"], True),
        ([], ["H350i"], True),
        ([], ["h350"], False),
        ([], ["H351"], False),
        (["R40"], ["H319"], False),
    ])
    def test_phrase_list(self, make_agent, r_phrases, h_phrases, expected):
        """R-phrases are case-insensitive, H-phrases are exact."""
        agent = make_agent(r_phrases=r_phrases, h_phrases=h_phrases)
        assert is_carcinogenic(agent) is expected

    def test_one_alert_for_several_phrases(self, make_agent):
        """R45 and H350 together still raise a single alert."""
        agent = make_agent(id="benz", r_phrases=["R45"], h_phrases=["H350", "H340"])
        alerts = generate_alerts(agent)
        assert _types(alerts) == [AlertType.CARCINOGENIC]
        assert alerts[0].id == "benz-carcinogenic"
        assert alerts[0].severity == AlertSeverity.CRITICAL


# ==================== WARNINGS ====================

class TestFiv:
    def test_fiv_warning(self, make_agent):
        """The FIV notation is a warning."""
        alerts = generate_alerts(make_agent(id="x", has_fiv=True))
        assert _types(alerts) == [AlertType.FIV]
        assert alerts[0].severity == AlertSeverity.WARNING
        assert alerts[0].id == "x-fiv"


class TestLowVla:
    @pytest.mark.parametrize("vla,factor", [
        (0.1, 10),
        (0.05, 10),
        (0.005, 30),
        (0.0005, 100),
    ])
    def test_factor_in_message(self, make_agent, vla, factor):
        """The message states the correction factor applied."""
        alerts = generate_alerts(make_agent(id="v", has_vla=True, vla_ed=vla))
        assert _types(alerts) == [AlertType.LOW_VLA]
        assert f"FC = {factor}" in alerts[0].message
        assert alerts[0].id == "v-low-vla"

    def test_above_threshold(self, make_agent):
        """0.2 mg/m3 raises nothing."""
        assert generate_alerts(make_agent(has_vla=True, vla_ed=0.2)) == []

    def test_particulate_adjustment(self, make_agent):
        """0.5 mg/m3 inhalable is adjusted to 0.05."""
        agent = make_agent(has_vla=True, vla_ed=0.5, particulate_matter="inhalable")
        assert _types(generate_alerts(agent)) == [AlertType.LOW_VLA]

    def test_undeclared_vla(self, make_agent):
        """A value without the flag is ignored."""
        assert generate_alerts(make_agent(has_vla=False, vla_ed=0.001)) == []


class TestTemperature:
    @pytest.mark.parametrize("boiling,working,raised", [
        (50, 60, True),
        (50, 50, False),
        (50, 20, False),
        (None, 60, False),
        (50, None, False),
    ])
    def test_strictly_above_boiling_point(self, make_agent, boiling, working, raised):
        """Only a working temperature strictly above boiling warns."""
        agent = make_agent(boiling_point=boiling, working_temperature=working)
        assert (AlertType.TEMP_EXCEEDS_BP in _types(generate_alerts(agent))) is raised


class TestConfinedSpace:
    def test_ventilation_class_five(self, make_agent):
        """Confined space is critical."""
        alerts = generate_alerts(make_agent(id="tank", ventilation_class=5))
        assert _types(alerts) == [AlertType.CONFINED_SPACE]
        assert alerts[0].severity == AlertSeverity.CRITICAL
        assert alerts[0].id == "tank-confined"

    def test_other_classes(self, make_agent):
        """Classes 1-4 raise nothing."""
        for ventilation in range(1, 5):
            assert generate_alerts(make_agent(ventilation_class=ventilation)) == []


# ==================== COMBINED ====================

class TestCombined:
    def test_all_flags(self, make_agent):
        """Every check fires once, in a fixed order."""
        agent = make_agent(
            id="worst",
            is_special_material=True,
            special_material_id="amianto",
            h_phrases=["H350"],
            has_fiv=True,
            has_vla=True,
            vla_ed=0.05,
            boiling_point=50,
            working_temperature=60,
            ventilation_class=5,
        )
        alerts = generate_alerts(agent)

        assert _types(alerts) == [
            AlertType.AMIANTO,
            AlertType.CARCINOGENIC,
            AlertType.FIV,
            AlertType.LOW_VLA,
            AlertType.TEMP_EXCEEDS_BP,
            AlertType.CONFINED_SPACE,
        ]
        assert len({a.key for a in alerts}) == 6
        assert len({a.id for a in alerts}) == 6
        assert all(a.agent_name == agent.display_name for a in alerts)

    def test_clean_agent(self, make_agent):
        """Defaults raise nothing."""
        assert generate_alerts(make_agent()) == []

    def test_batch_groups_by_agent(self, make_agent):
        """Batch output follows input order."""
        agents = [
            make_agent(id="one", ventilation_class=5),
            make_agent(id="two"),
            make_agent(id="three", has_fiv=True, h_phrases=["H350"]),
        ]
        assert [a.id for a in generate_all_alerts(agents)] == [
            "one-confined",
            "three-carcinogenic",
            "three-fiv",
        ]
