# -*- coding: utf-8 -*-
"""
Danger Classifier Tests

- Fail-low default when an agent carries no hazard data
- Maximum over phrase, VLA and special-material candidates
- Case rules of R- and H-phrases
- Dermal toxicity derivation from phrases
"""

import itertools

import pytest

from chemrisk.inrs.danger_classifier import (
    danger_class_candidates,
    danger_score,
    determine_danger_class,
    has_dermal_toxicity_phrases,
    with_derived_dermal_toxicity,
)
from chemrisk.inrs.models import LabelingSystem, PhysicalState


class TestDefaultClass:
    @pytest.mark.parametrize("state", list(PhysicalState))
    def test_no_hazard_data_is_class_one(self, make_agent, state):
        """No phrases, VLA or special material: class 1."""
        agent = make_agent(physical_state=state, labeling_system=LabelingSystem.NONE)
        assert danger_class_candidates(agent) == []
        assert determine_danger_class(agent) == 1

    def test_unknown_phrases_fall_back_to_one(self, make_agent):
        """Unknown codes are ignored, not errors."""
        agent = make_agent(r_phrases=["R99"], h_phrases=["H999", "EUH066"])
        assert determine_danger_class(agent) == 1


class TestCandidates:
    def test_maximum_of_phrases(self, make_agent):
        """The highest phrase class wins."""
        agent = make_agent(
            labeling_system=LabelingSystem.BOTH,
            r_phrases=["R36"],
            h_phrases=["H319", "H350"],
        )
        assert determine_danger_class(agent) == 5

    def test_r_phrases_are_normalized(self, make_agent):
        """Lower-case, padded R-phrases still match."""
        agent = make_agent(r_phrases=[" r45 "])
        assert determine_danger_class(agent) == 5

    def test_h_phrases_are_case_sensitive(self, make_agent):
        """A lower-case H-phrase does not match."""
        assert determine_danger_class(make_agent(h_phrases=["h350"])) == 1
        assert determine_danger_class(make_agent(h_phrases=[" H350 "])) == 5

    def test_vla_candidate(self, make_agent):
        """A declared VLA-ED contributes its class."""
        agent = make_agent(has_vla=True, vla_ed=0.05)
        assert determine_danger_class(agent) == 5

    def test_vla_ignored_without_flag_or_value(self, make_agent):
        """The VLA counts only when declared with a value."""
        assert determine_danger_class(make_agent(has_vla=False, vla_ed=0.05)) == 1
        assert determine_danger_class(make_agent(has_vla=True, vla_ed=None)) == 1

    def test_vla_class_uses_raw_value(self, make_agent):
        """The particulate adjustment does not change the danger class."""
        agent = make_agent(has_vla=True, vla_ed=5.0, particulate_matter="inhalable")
        assert determine_danger_class(agent) == 3

    def test_special_material(self, make_agent):
        """Asbestos alone yields class 5."""
        agent = make_agent(is_special_material=True, special_material_id="amianto")
        assert determine_danger_class(agent) == 5

    def test_special_material_requires_flag_and_known_id(self, make_agent):
        """An id without the flag, or an unknown id, contributes nothing."""
        assert determine_danger_class(
            make_agent(is_special_material=False, special_material_id="amianto")
        ) == 1
        assert determine_danger_class(
            make_agent(is_special_material=True, special_material_id="unobtainium")
        ) == 1

    def test_special_material_combined_with_phrases(self, make_agent):
        """Special material and phrases compete for the maximum."""
        agent = make_agent(
            h_phrases=["H319"],
            is_special_material=True,
            special_material_id="cement",
        )
        assert determine_danger_class(agent) == 3


class TestDangerScore:
    @pytest.mark.parametrize("phrase,score", [
        ("H303", 1),
        ("H319", 10),
        ("H302", 100),
        ("H314", 1000),
        ("H350", 10000),
    ])
    def test_exponential_score(self, make_agent, phrase, score):
        """Danger class 1-5 scores 1 to 10000."""
        assert danger_score(make_agent(h_phrases=[phrase])) == score


class TestBounds:
    def test_class_always_in_range(self, make_agent):
        """Every combination of inputs yields a class between 1 and 5."""
        phrase_sets = [[], ["H303"], ["H350", "H319"], ["bogus"]]
        vlas = [None, 0.0, 0.05, 5.0, 1000.0]
        materials = [None, "amianto", "sugar", "nope"]
        for phrases, vla, material in itertools.product(phrase_sets, vlas, materials):
            agent = make_agent(
                h_phrases=phrases,
                has_vla=vla is not None,
                vla_ed=vla,
                is_special_material=material is not None,
                special_material_id=material,
            )
            assert 1 <= determine_danger_class(agent) <= 5


class TestDermalToxicityDerivation:
    @pytest.mark.parametrize("r_phrases,h_phrases,expected", [
        ([], ["H312"], True),
        ([], ["H314", "H350"], True),
        (["r21"], [], True),
        (["R43"], [], True),
        ([], ["H350"], False),
        (["R45"], ["H319"], False),
    ])
    def test_phrase_detection(self, make_agent, r_phrases, h_phrases, expected):
        """Dermal R/H phrases mark the agent as toxic through the skin."""
        agent = make_agent(r_phrases=r_phrases, h_phrases=h_phrases)
        assert has_dermal_toxicity_phrases(agent) is expected

    def test_flag_is_set(self, make_agent):
        """A dermal phrase sets the flag on a copy."""
        agent = make_agent(h_phrases=["H315"])
        derived = with_derived_dermal_toxicity(agent)
        assert derived.has_dermal_toxicity is True
        assert agent.has_dermal_toxicity is False

    def test_unchanged_agent_is_returned_as_is(self, make_agent):
        """Nothing to derive: the same instance comes back."""
        agent = make_agent(h_phrases=["H350"])
        assert with_derived_dermal_toxicity(agent) is agent

    def test_manual_flag_is_never_cleared(self, make_agent):
        """A flag set by hand survives even without dermal phrases."""
        agent = make_agent(h_phrases=["H350"], has_dermal_toxicity=True)
        assert with_derived_dermal_toxicity(agent).has_dermal_toxicity is True
