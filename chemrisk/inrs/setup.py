# -*- coding: utf-8 -*-
"""
INRS Chemical Risk Service Setup

Provides the ``ChemicalRiskService`` facade over the INRS engines
(hierarchization, inhalation, dermal, alerts, inventory validation) and
``get_service()`` for programmatic access to a process-wide instance.

The engines are pure functions. The facade adds what surrounds them in
a running service: configuration (Pareto selection, dermal toxicity
derivation, capacity limit), a SHA-256 provenance chain, Prometheus
metrics and running statistics. It keeps no evaluation records; every
call recomputes its results from the agents it is given.

Usage:
    >>> from chemrisk.inrs.setup import get_service
    >>> from chemrisk.inrs.models import ChemicalAgent
    >>> service = get_service()
    >>> result = service.run_assessment([
    ...     ChemicalAgent(id="a1", commercial_name="Solvent X",
    ...                   h_phrases=["H350"], quantity=10, boiling_point=56,
    ...                   working_temperature=20),
    ... ])
    >>> result.inhalation[0].risk_level.value
    'very_high'
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from chemrisk.exceptions import InventoryValidationError, format_exception_chain
from chemrisk.inrs import alerts as alerts_engine
from chemrisk.inrs import dermal as dermal_engine
from chemrisk.inrs import hierarchy as hierarchy_engine
from chemrisk.inrs import inhalation as inhalation_engine
from chemrisk.inrs import inventory_validator
from chemrisk.inrs.config import InrsConfig, get_config
from chemrisk.inrs.danger_classifier import with_derived_dermal_toxicity
from chemrisk.inrs.metrics import (
    observe_duration,
    record_alert,
    record_classification,
    record_dermal,
    record_hierarchy_run,
    record_inhalation,
    record_inventory_issue,
    set_high_priority,
)
from chemrisk.inrs.models import (
    Alert,
    AssessmentResult,
    ChemicalAgent,
    DermalResult,
    HierarchyResult,
    InhalationResult,
    InventoryValidationResult,
    Priority,
)
from chemrisk.inrs.provenance import ProvenanceEntry, ProvenanceTracker, hash_data

logger = logging.getLogger(__name__)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _new_run_id() -> str:
    return uuid.uuid4().hex


# ===================================================================
# Service facade
# ===================================================================


class ChemicalRiskService:
    """Unified facade over the INRS chemical risk engines.

    Each public method validates the batch size, applies the configured
    preprocessing, delegates to the engine, then records provenance and
    Prometheus metrics.

    Attributes:
        config: InrsConfig instance.
        provenance: ProvenanceTracker for SHA-256 audit trails.

    Example:
        >>> service = ChemicalRiskService()
        >>> ranked = service.compute_hierarchy(agents)
        >>> [r.agent_id for r in ranked if r.selected]
    """

    def __init__(
        self,
        config: Optional[InrsConfig] = None,
        provenance: Optional[ProvenanceTracker] = None,
    ) -> None:
        """Initialize the service facade.

        Args:
            config: Optional configuration. Uses global config if None.
            provenance: Optional ProvenanceTracker. Creates a new one
                anchored on ``config.genesis_hash`` and bounded by
                ``config.max_provenance_entries`` if None.
        """
        self.config = config if config is not None else get_config()
        self.provenance = (
            provenance
            if provenance is not None
            else ProvenanceTracker(
                genesis_hash=self.config.genesis_hash,
                max_entries=self.config.max_provenance_entries,
            )
        )
        logging.getLogger("chemrisk").setLevel(self.config.log_level)

        self._stats_lock = threading.Lock()
        self._total_hierarchy_runs: int = 0
        self._total_agents_ranked: int = 0
        self._total_inhalation: int = 0
        self._total_dermal: int = 0
        self._total_dermal_not_applicable: int = 0
        self._total_alerts: int = 0
        self._total_validations: int = 0
        self._total_assessments: int = 0
        self._last_assessment_at: Optional[str] = None

        logger.info(
            "ChemicalRiskService created: pareto_threshold=%.1f, "
            "auto_select_pareto=%s, provenance=%s, metrics=%s",
            self.config.pareto_threshold,
            self.config.auto_select_pareto,
            self.config.enable_provenance,
            self.config.enable_metrics,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _prepare(self, agents: Iterable[ChemicalAgent]) -> List[ChemicalAgent]:
        agents = list(agents)
        if len(agents) > self.config.max_agents:
            raise InventoryValidationError(
                f"Inventory holds {len(agents)} agents, more than the "
                f"configured maximum of {self.config.max_agents}",
                issues=[{
                    "agent_id": None,
                    "field": "agents",
                    "message": f"at most {self.config.max_agents} agents "
                               f"per call",
                }],
            )
        if self.config.derive_dermal_toxicity:
            agents = [with_derived_dermal_toxicity(a) for a in agents]
        return agents

    def _record(
        self,
        entity_type: str,
        action: str,
        entity_id: str,
        data: Any = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[ProvenanceEntry]:
        if not self.config.enable_provenance:
            return None
        return self.provenance.record(
            entity_type=entity_type,
            action=action,
            entity_id=entity_id,
            data=data,
            metadata=metadata,
        )

    def _observe(self, operation: str, t0: float) -> None:
        if self.config.enable_metrics:
            observe_duration(operation, time.perf_counter() - t0)

    # ------------------------------------------------------------------
    # Hierarchization
    # ------------------------------------------------------------------

    def compute_hierarchy(
        self,
        agents: Iterable[ChemicalAgent],
    ) -> List[HierarchyResult]:
        """Rank agents by potential risk.

        When ``auto_select_pareto`` is on, the Pareto set for the
        configured threshold comes back with ``selected`` set.

        Args:
            agents: Agent inventory.

        Returns:
            Ranked list of :class:`HierarchyResult`.
        """
        t0 = time.perf_counter()
        agents = self._prepare(agents)

        results = hierarchy_engine.compute_hierarchy(agents)
        if self.config.auto_select_pareto:
            results = hierarchy_engine.select_for_detailed_evaluation(
                results, threshold=self.config.pareto_threshold,
            )

        high = sum(1 for r in results if r.priority == Priority.HIGH)
        self._record(
            "hierarchy",
            "compute_hierarchy",
            _new_run_id(),
            data={"agents": agents, "results": results},
            metadata={"agents": len(results), "high_priority": high},
        )

        if self.config.enable_metrics:
            record_hierarchy_run()
            for r in results:
                record_classification(r.danger_class)
            set_high_priority(high)
        with self._stats_lock:
            self._total_hierarchy_runs += 1
            self._total_agents_ranked += len(results)

        self._observe("compute_hierarchy", t0)
        return results

    # ------------------------------------------------------------------
    # Inhalation
    # ------------------------------------------------------------------

    def evaluate_all_inhalation(
        self,
        agents: Iterable[ChemicalAgent],
    ) -> List[InhalationResult]:
        """Evaluate inhalation risk for every agent, in input order."""
        t0 = time.perf_counter()
        agents = self._prepare(agents)

        results = inhalation_engine.evaluate_all_inhalation(agents)
        for r in results:
            self._record(
                "inhalation",
                "evaluate_inhalation",
                r.agent_id,
                data=r,
                metadata={
                    "risk_score": r.risk_score,
                    "risk_level": r.risk_level.value,
                },
            )
            if self.config.enable_metrics:
                record_inhalation(r.risk_level.value)

        with self._stats_lock:
            self._total_inhalation += len(results)

        logger.info(
            "Inhalation evaluated: agents=%d, very_high=%d",
            len(results),
            sum(1 for r in results if r.risk_level.value == "very_high"),
        )
        self._observe("evaluate_inhalation", t0)
        return results

    # ------------------------------------------------------------------
    # Dermal
    # ------------------------------------------------------------------

    def evaluate_dermal_risk(self, agent: ChemicalAgent) -> Optional[DermalResult]:
        """Evaluate dermal risk of one agent; None when not applicable."""
        t0 = time.perf_counter()
        (agent,) = self._prepare([agent])

        result = dermal_engine.evaluate_dermal_risk(agent)
        if result is None:
            level = "not_applicable"
            with self._stats_lock:
                self._total_dermal_not_applicable += 1
        else:
            level = result.risk_level.value
            self._record(
                "dermal",
                "evaluate_dermal",
                agent.id,
                data=result,
                metadata={"risk_score": result.risk_score, "risk_level": level},
            )
            with self._stats_lock:
                self._total_dermal += 1

        if self.config.enable_metrics:
            record_dermal(level)
        self._observe("evaluate_dermal", t0)
        return result

    def evaluate_all_dermal(
        self,
        agents: Iterable[ChemicalAgent],
    ) -> List[DermalResult]:
        """Evaluate dermal risk of every agent, dropping not-applicable ones."""
        results: List[DermalResult] = []
        for agent in self._prepare(agents):
            result = self.evaluate_dermal_risk(agent)
            if result is not None:
                results.append(result)
        return results

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def generate_all_alerts(self, agents: Iterable[ChemicalAgent]) -> List[Alert]:
        """Alerts for every agent."""
        t0 = time.perf_counter()
        agents = self._prepare(agents)

        alerts = alerts_engine.generate_all_alerts(agents)
        self._record(
            "alert",
            "generate_alerts",
            _new_run_id(),
            data=alerts,
            metadata={"agents": len(agents), "alerts": len(alerts)},
        )

        if self.config.enable_metrics:
            for alert in alerts:
                record_alert(alert.type.value, alert.severity.value)
        with self._stats_lock:
            self._total_alerts += len(alerts)

        if alerts:
            logger.info(
                "Alerts generated: agents=%d, alerts=%d, critical=%d",
                len(agents),
                len(alerts),
                sum(1 for a in alerts if a.severity.value == "critical"),
            )
        self._observe("generate_alerts", t0)
        return alerts

    # ------------------------------------------------------------------
    # Inventory validation
    # ------------------------------------------------------------------

    def validate_inventory(
        self,
        agents: Iterable[ChemicalAgent],
    ) -> InventoryValidationResult:
        """Run the inventory completeness checks. Never raises on issues."""
        t0 = time.perf_counter()
        agents = self._prepare(agents)

        result = inventory_validator.validate_inventory(agents)
        self._record(
            "inventory",
            "validate_inventory",
            _new_run_id(),
            data=agents,
            metadata={"agents": len(agents), "issues": len(result.issues)},
        )

        if self.config.enable_metrics:
            for issue in result.issues:
                record_inventory_issue(issue.field)
        with self._stats_lock:
            self._total_validations += 1

        self._observe("validate_inventory", t0)
        return result

    # ------------------------------------------------------------------
    # Full assessment
    # ------------------------------------------------------------------

    def run_assessment(
        self,
        agents: Iterable[ChemicalAgent],
        selected_ids: Optional[Iterable[str]] = None,
        validate: bool = False,
    ) -> AssessmentResult:
        """Run the complete assessment of an inventory.

        Steps: optional validation, hierarchization, selection, inhalation
        and dermal evaluation of the selected agents, alerts over every
        agent.

        Args:
            agents: Agent inventory.
            selected_ids: Agents to evaluate in detail. When None the
                Pareto set is used if ``auto_select_pareto`` is on,
                otherwise every agent.
            validate: Run the inventory checks first and raise on issues.

        Returns:
            :class:`AssessmentResult` bundling every output.

        Raises:
            InventoryValidationError: When ``validate`` is set and the
                inventory has issues, or the inventory is too large.
        """
        t0 = time.perf_counter()
        run_id = _new_run_id()

        try:
            agents = self._prepare(agents)
            if validate:
                self.validate_inventory(agents).raise_for_errors()
        except InventoryValidationError as exc:
            logger.error(
                "Assessment %s rejected:\n%s",
                run_id[:8],
                format_exception_chain(exc),
            )
            raise

        ranked = self.compute_hierarchy(agents)
        pareto_ids = [
            r.agent_id
            for r in hierarchy_engine.pareto_agents(
                ranked, self.config.pareto_threshold,
            )
        ]

        if selected_ids is not None:
            chosen = list(selected_ids)
        elif self.config.auto_select_pareto:
            chosen = pareto_ids
        else:
            chosen = [a.id for a in agents]
        ranked = hierarchy_engine.select_for_detailed_evaluation(
            ranked, agent_ids=chosen,
        )

        chosen_set = set(chosen)
        selected = [a for a in agents if a.id in chosen_set]

        inhalation = self.evaluate_all_inhalation(selected)
        dermal = self.evaluate_all_dermal(selected)
        alerts = self.generate_all_alerts(agents)

        payload = {
            "agents": agents,
            "hierarchy": ranked,
            "inhalation": inhalation,
            "dermal": dermal,
            "alerts": alerts,
        }
        entry = self._record(
            "assessment",
            "run_assessment",
            run_id,
            data=payload,
            metadata={
                "agents": len(agents),
                "selected": len(selected),
                "alerts": len(alerts),
            },
        )
        provenance_hash = entry.hash_value if entry is not None else hash_data(payload)

        result = AssessmentResult(
            hierarchy=ranked,
            inhalation=inhalation,
            dermal=dermal,
            alerts=alerts,
            pareto_agent_ids=pareto_ids,
            provenance_hash=provenance_hash,
        )

        with self._stats_lock:
            self._total_assessments += 1
            self._last_assessment_at = _utcnow_iso()

        elapsed = time.perf_counter() - t0
        if self.config.enable_metrics:
            observe_duration("run_assessment", elapsed)
        logger.info(
            "Assessment %s complete: agents=%d selected=%d alerts=%d "
            "elapsed_ms=%.2f",
            run_id[:8],
            len(agents),
            len(selected),
            len(alerts),
            elapsed * 1000,
        )
        return result

    # ==================================================================
    # Statistics, health and provenance
    # ==================================================================

    def get_statistics(self) -> Dict[str, Any]:
        """Aggregate counters since the service was created."""
        with self._stats_lock:
            return {
                "total_hierarchy_runs": self._total_hierarchy_runs,
                "total_agents_ranked": self._total_agents_ranked,
                "total_inhalation_evaluations": self._total_inhalation,
                "total_dermal_evaluations": self._total_dermal,
                "total_dermal_not_applicable": self._total_dermal_not_applicable,
                "total_alerts": self._total_alerts,
                "total_validations": self._total_validations,
                "total_assessments": self._total_assessments,
                "last_assessment_at": self._last_assessment_at,
            }

    def get_health(self) -> Dict[str, Any]:
        """Health check: provenance chain integrity plus statistics.

        Returns:
            Dictionary with ``status`` ("healthy" or "degraded"),
            ``provenance_chain_valid``, ``provenance_entries``,
            ``statistics``, ``config`` and ``timestamp``.
        """
        chain_valid = self.provenance.verify_chain()
        status = "healthy" if chain_valid else "degraded"
        if not chain_valid:
            logger.warning("Health check: provenance chain is broken")
        return {
            "status": status,
            "provenance_chain_valid": chain_valid,
            "provenance_entries": self.provenance.entry_count,
            "statistics": self.get_statistics(),
            "config": self.config.to_dict(),
            "timestamp": _utcnow_iso(),
        }

    def get_provenance(self) -> ProvenanceTracker:
        """Return the provenance tracker used by this service."""
        return self.provenance


# ===================================================================
# Thread-safe singleton access
# ===================================================================

_singleton_instance: Optional[ChemicalRiskService] = None
_singleton_lock = threading.Lock()


def get_service() -> ChemicalRiskService:
    """Get the singleton ChemicalRiskService instance.

    Creates a new instance from :func:`get_config` on first use. Uses
    double-checked locking for thread safety.
    """
    global _singleton_instance
    if _singleton_instance is None:
        with _singleton_lock:
            if _singleton_instance is None:
                _singleton_instance = ChemicalRiskService()
    return _singleton_instance


def reset_service() -> None:
    """Drop the singleton so the next :func:`get_service` builds a new one."""
    global _singleton_instance
    with _singleton_lock:
        _singleton_instance = None
    logger.debug("ChemicalRiskService singleton reset")


__all__ = [
    "ChemicalRiskService",
    "get_service",
    "reset_service",
]
