# -*- coding: utf-8 -*-
"""
Prometheus Metrics - INRS Chemical Risk Service

Prometheus metrics for the chemical risk assessment service. All metric
names use the ``cr_inrs_`` prefix.

Metrics:
    1. cr_inrs_agents_classified_total        (Counter,   labels: danger_class)
    2. cr_inrs_hierarchy_runs_total           (Counter)
    3. cr_inrs_inhalation_evaluations_total   (Counter,   labels: risk_level)
    4. cr_inrs_dermal_evaluations_total       (Counter,   labels: risk_level)
    5. cr_inrs_alerts_total                   (Counter,   labels: alert_type, severity)
    6. cr_inrs_inventory_issues_total         (Counter,   labels: field)
    7. cr_inrs_high_priority_agents           (Gauge)
    8. cr_inrs_assessment_duration_seconds    (Histogram, labels: operation)

Label Values Reference:
    danger_class: 1, 2, 3, 4, 5.
    risk_level: low, moderate, very_high, not_applicable (dermal only).
    alert_type: amianto, carcinogenic, fiv, low_vla, temp_exceeds_bp,
        confined_space.
    severity: critical, warning, info.
    operation: compute_hierarchy, evaluate_inhalation, evaluate_dermal,
        generate_alerts, validate_inventory, run_assessment.

The service facade skips every helper when ``enable_metrics`` is off.

Example:
    >>> from chemrisk.inrs.metrics import record_alert, set_high_priority
    >>> record_alert("carcinogenic", "critical")
    >>> set_high_priority(3)
"""

from __future__ import annotations

import logging

from prometheus_client import Counter, Gauge, Histogram

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# 1. Agents passed through the danger classifier by hierarchization
cr_inrs_agents_classified_total = Counter(
    "cr_inrs_agents_classified_total",
    "Total chemical agents classified by danger class",
    labelnames=["danger_class"],
)

# 2. Hierarchization runs
cr_inrs_hierarchy_runs_total = Counter(
    "cr_inrs_hierarchy_runs_total",
    "Total potential-risk hierarchization runs",
)

# 3. Inhalation evaluations by risk level
cr_inrs_inhalation_evaluations_total = Counter(
    "cr_inrs_inhalation_evaluations_total",
    "Total inhalation risk evaluations",
    labelnames=["risk_level"],
)

# 4. Dermal evaluations by risk level or not_applicable
cr_inrs_dermal_evaluations_total = Counter(
    "cr_inrs_dermal_evaluations_total",
    "Total dermal risk evaluations",
    labelnames=["risk_level"],
)

# 5. Alerts by type and severity
cr_inrs_alerts_total = Counter(
    "cr_inrs_alerts_total",
    "Total alerts raised on chemical agents",
    labelnames=["alert_type", "severity"],
)

# 6. Inventory validation issues by field
cr_inrs_inventory_issues_total = Counter(
    "cr_inrs_inventory_issues_total",
    "Total inventory validation issues",
    labelnames=["field"],
)

# 7. High-priority agents in the latest hierarchization
cr_inrs_high_priority_agents = Gauge(
    "cr_inrs_high_priority_agents",
    "Number of high-priority agents in the latest hierarchization",
)

# 8. Operation duration
cr_inrs_assessment_duration_seconds = Histogram(
    "cr_inrs_assessment_duration_seconds",
    "Duration of chemical risk service operations in seconds",
    labelnames=["operation"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------


def record_classification(danger_class: int) -> None:
    """Record one agent classified into ``danger_class``."""
    cr_inrs_agents_classified_total.labels(danger_class=str(danger_class)).inc()


def record_hierarchy_run() -> None:
    """Record one hierarchization run."""
    cr_inrs_hierarchy_runs_total.inc()


def record_inhalation(risk_level: str) -> None:
    """Record one inhalation evaluation.

    Args:
        risk_level: low, moderate or very_high.
    """
    cr_inrs_inhalation_evaluations_total.labels(risk_level=risk_level).inc()


def record_dermal(risk_level: str) -> None:
    """Record one dermal evaluation.

    Args:
        risk_level: low, moderate, very_high or not_applicable.
    """
    cr_inrs_dermal_evaluations_total.labels(risk_level=risk_level).inc()


def record_alert(alert_type: str, severity: str) -> None:
    """Record one alert raised."""
    cr_inrs_alerts_total.labels(alert_type=alert_type, severity=severity).inc()


def record_inventory_issue(field: str) -> None:
    """Record one inventory validation issue on ``field``."""
    cr_inrs_inventory_issues_total.labels(field=field).inc()


def set_high_priority(count: int) -> None:
    """Set the high-priority agents gauge."""
    cr_inrs_high_priority_agents.set(count)


def observe_duration(operation: str, seconds: float) -> None:
    """Observe the duration of one service operation."""
    cr_inrs_assessment_duration_seconds.labels(operation=operation).observe(seconds)


__all__ = [
    "cr_inrs_agents_classified_total",
    "cr_inrs_hierarchy_runs_total",
    "cr_inrs_inhalation_evaluations_total",
    "cr_inrs_dermal_evaluations_total",
    "cr_inrs_alerts_total",
    "cr_inrs_inventory_issues_total",
    "cr_inrs_high_priority_agents",
    "cr_inrs_assessment_duration_seconds",
    "record_classification",
    "record_hierarchy_run",
    "record_inhalation",
    "record_dermal",
    "record_alert",
    "record_inventory_issue",
    "set_high_priority",
    "observe_duration",
]
