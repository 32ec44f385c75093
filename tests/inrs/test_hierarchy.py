# -*- coding: utf-8 -*-
"""
Hierarchization Engine Tests

This test suite validates:
- Quantity normalization and the degenerate all-zero case
- IPA percentages (sum to 100, reference 10000/1000/100 split)
- Priority rule and the ranked order with its tie-break chain
- Pareto interpretation and selection for detailed evaluation
"""

import pytest
from pydantic import ValidationError

from chemrisk.inrs.hierarchy import (
    assign_priority,
    compute_hierarchy,
    normalize_quantity,
    pareto_agents,
    quantity_index,
    select_for_detailed_evaluation,
)
from chemrisk.inrs.models import Priority


# ==================== NORMALIZATION ====================

class TestQuantityNormalization:
    @pytest.mark.parametrize("quantity,unit,expected", [
        (1500, "g", 1.5),
        (250, "ml", 0.25),
        (3, "kg", 3),
        (3, "l", 3),
        (2, "ton", 2000),
        (-5, "kg", 0),
        (float("nan"), "kg", 0),
        (float("inf"), "ton", 0),
        (float("-inf"), "g", 0),
    ])
    def test_units(self, make_agent, quantity, unit, expected):
        """g and ml / 1000, ton x 1000, negatives clamp to 0."""
        agent = make_agent(quantity=quantity, quantity_unit=unit)
        assert normalize_quantity(agent) == pytest.approx(expected)

    def test_index_against_maximum(self):
        """Percent of the inventory maximum."""
        assert quantity_index(25, 100) == 25
        assert quantity_index(0, 100) == 0

    def test_degenerate_maximum_fails_high(self):
        """All quantities zero: every index is 100."""
        assert quantity_index(0, 0) == 100

    def test_all_zero_quantities_give_class_five(self, make_agent):
        """The degenerate inventory is treated as maximal quantity."""
        results = compute_hierarchy([
            make_agent(quantity=0),
            make_agent(quantity=0, quantity_unit="g"),
        ])
        assert [r.quantity_class for r in results] == [5, 5]

    def test_mixed_units_are_compared_in_kg(self, make_agent):
        """1000 g against 1 ton is a 0.1 percent index."""
        results = compute_hierarchy([
            make_agent(id="grams", quantity=1000, quantity_unit="g"),
            make_agent(id="tons", quantity=1, quantity_unit="ton"),
        ])
        by_id = {r.agent_id: r for r in results}
        assert by_id["grams"].quantity_class == 1
        assert by_id["tons"].quantity_class == 5


# ==================== SCORES ====================

class TestScores:
    def test_empty_inventory(self):
        """No agents, no results."""
        assert compute_hierarchy([]) == []

    def test_one_result_per_agent(self, ranked_trio):
        """Output has the same length as the input."""
        assert len(compute_hierarchy(ranked_trio)) == len(ranked_trio)

    def test_reference_ipa_split(self, ranked_trio):
        """Scores 10000, 1000, 100 give 90.09 %, 9.01 % and 0.90 %."""
        results = compute_hierarchy(ranked_trio)
        by_id = {r.agent_id: r for r in results}

        assert by_id["a"].risk_score == 10000
        assert by_id["b"].risk_score == 1000
        assert by_id["c"].risk_score == 100
        assert by_id["a"].ipa_percent == pytest.approx(90.09, abs=0.01)
        assert by_id["b"].ipa_percent == pytest.approx(9.01, abs=0.01)
        assert by_id["c"].ipa_percent == pytest.approx(0.90, abs=0.01)

    def test_ipa_sums_to_hundred(self, make_agent):
        """IPA percentages add up to 100."""
        agents = [
            make_agent(h_phrases=[h], quantity=q, frequency_level=f)
            for h, q, f in [
                ("H350", 10, 2), ("H302", 80, 3), ("H319", 5, 4),
                ("H314", 100, 1), ("H303", 40, 0),
            ]
        ]
        results = compute_hierarchy(agents)
        assert sum(r.ipa_percent for r in results) == pytest.approx(100)
        assert results[-1].cumulative_percent == pytest.approx(100)

    def test_frequency_zero_gives_minimum_risk(self, make_agent):
        """Not used: exposure 0, risk class 1, score 1."""
        (result,) = compute_hierarchy([
            make_agent(h_phrases=["H350"], quantity=100, frequency_level=0),
        ])
        assert result.potential_exposure_class == 0
        assert result.potential_risk_class == 1
        assert result.risk_score == 1

    def test_classes_are_recorded(self, ranked_trio):
        """Every intermediate class is exposed on the result."""
        results = compute_hierarchy(ranked_trio)
        top = results[0]
        assert (top.danger_class, top.quantity_class, top.frequency_class) == (5, 5, 4)
        assert (top.potential_exposure_class, top.potential_risk_class) == (5, 5)

    def test_results_are_frozen(self, ranked_trio):
        """Results are read-only records."""
        result = compute_hierarchy(ranked_trio)[0]
        with pytest.raises(ValidationError):
            result.selected = True


# ==================== PRIORITY AND ORDER ====================

class TestPriority:
    @pytest.mark.parametrize("score,danger,expected", [
        (10000, 5, Priority.HIGH),
        (10000, 4, Priority.HIGH),
        (10000, 3, Priority.MEDIUM),
        (1000, 5, Priority.MEDIUM),
        (101, 1, Priority.MEDIUM),
        (100, 5, Priority.LOW),
        (1, 1, Priority.LOW),
    ])
    def test_rule(self, score, danger, expected):
        """HIGH needs danger >= 4 at the top score; MEDIUM is above 100."""
        assert assign_priority(score, danger) == expected

    def test_reference_priorities(self, ranked_trio):
        """The trio spans the three tiers."""
        results = compute_hierarchy(ranked_trio)
        assert [(r.agent_id, r.priority) for r in results] == [
            ("a", Priority.HIGH),
            ("b", Priority.MEDIUM),
            ("c", Priority.LOW),
        ]


class TestRanking:
    def test_tie_break_chain(self, make_agent):
        """Within a tier: danger class descending, then score descending."""
        agents = [
            make_agent(id="s", h_phrases=["H319"], quantity=100, frequency_level=4),
            make_agent(id="r", h_phrases=["H302"], quantity=100, frequency_level=0),
            make_agent(id="q", h_phrases=["H302"], quantity=100, frequency_level=1),
            make_agent(id="p", h_phrases=["H302"], quantity=100, frequency_level=3),
        ]
        results = compute_hierarchy(agents)

        assert all(r.priority == Priority.LOW for r in results)
        assert [(r.agent_id, r.danger_class, r.risk_score) for r in results] == [
            ("p", 3, 100),
            ("q", 3, 10),
            ("r", 3, 1),
            ("s", 2, 100),
        ]

    def test_sort_is_stable(self, make_agent):
        """Identical agents keep their input order."""
        agents = [
            make_agent(id=name, h_phrases=["H302"], quantity=10, frequency_level=2)
            for name in ("first", "second", "third")
        ]
        assert [r.agent_id for r in compute_hierarchy(agents)] == [
            "first", "second", "third",
        ]

    def test_input_order_does_not_matter(self, ranked_trio):
        """Ranking is independent of the input order."""
        forward = [r.agent_id for r in compute_hierarchy(ranked_trio)]
        backward = [r.agent_id for r in compute_hierarchy(list(reversed(ranked_trio)))]
        assert forward == backward == ["a", "b", "c"]

    def test_non_finite_quantity_does_not_depend_on_order(self, make_agent):
        """A NaN quantity counts as 0 wherever it sits in the inventory."""
        def inventory():
            return {
                "unknown": make_agent(id="unknown", h_phrases=["H350"],
                                      quantity=float("nan"), frequency_level=4),
                "big": make_agent(id="big", h_phrases=["H350"],
                                  quantity=100, frequency_level=4),
                "small": make_agent(id="small", h_phrases=["H350"],
                                    quantity=0.5, frequency_level=4),
            }

        orders = [
            ["unknown", "big", "small"],
            ["big", "small", "unknown"],
            ["small", "unknown", "big"],
        ]
        classes = []
        for order in orders:
            agents = inventory()
            results = compute_hierarchy([agents[name] for name in order])
            classes.append({r.agent_id: r.quantity_class for r in results})

        assert classes[0] == classes[1] == classes[2]
        assert classes[0] == {"unknown": 1, "big": 5, "small": 1}

    def test_cumulative_percent_is_non_decreasing(self, ranked_trio):
        """Cumulative IPA follows the ranked order."""
        cumulative = [r.cumulative_percent for r in compute_hierarchy(ranked_trio)]
        assert cumulative == sorted(cumulative)
        assert cumulative[0] == pytest.approx(90.09, abs=0.01)


# ==================== PARETO ====================

class TestPareto:
    def test_default_threshold(self, ranked_trio):
        """The first agent alone already holds 90 % of the risk."""
        results = compute_hierarchy(ranked_trio)
        assert [r.agent_id for r in pareto_agents(results)] == ["a"]

    def test_higher_threshold(self, ranked_trio):
        """At 95 % the second agent is needed too."""
        results = compute_hierarchy(ranked_trio)
        assert [r.agent_id for r in pareto_agents(results, 95.0)] == ["a", "b"]

    def test_empty(self):
        """No results, no Pareto set."""
        assert pareto_agents([]) == []

    def test_default_selection(self, ranked_trio):
        """Without explicit ids the Pareto set is selected."""
        selected = select_for_detailed_evaluation(compute_hierarchy(ranked_trio))
        assert [(r.agent_id, r.selected) for r in selected] == [
            ("a", True), ("b", False), ("c", False),
        ]

    def test_explicit_selection(self, ranked_trio):
        """Explicit ids override the Pareto set; order is kept."""
        results = compute_hierarchy(ranked_trio)
        selected = select_for_detailed_evaluation(results, agent_ids=["c", "b"])
        assert [r.selected for r in selected] == [False, True, True]
        assert all(not r.selected for r in results)

    def test_explicit_empty_selection(self, ranked_trio):
        """An empty id list selects nothing."""
        results = compute_hierarchy(ranked_trio)
        assert not any(r.selected for r in select_for_detailed_evaluation(results, []))
