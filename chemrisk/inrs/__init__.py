# -*- coding: utf-8 -*-
"""
INRS Simplified Chemical Risk Assessment Engine (NTP 937)
=========================================================

Rule-based scoring of chemical agents with the INRS simplified method
as published in NTP 937 (ND 2233-200-05). It supports:

- Danger classification (CP 1-5) from R-phrases, CLP H-phrases,
  occupational exposure limits (VLA-ED) and special materials
- Potential-risk hierarchization of a whole inventory (quantity and
  frequency classes, exposure and risk matrices, IPA percentages,
  priority tiers) with Pareto selection for detailed evaluation
- Inhalation risk (PRI) from danger, volatility / pulverulence, work
  procedure, collective protection and VLA correction factor
- Dermal risk (PRD) from danger, exposed surface and contact frequency
- Regulatory alerts (asbestos, carcinogens, FIV, very low VLA,
  confined space, inconsistent temperatures)
- Inventory completeness checks
- SHA-256 provenance chain tracking for complete audit trails
- Prometheus metrics with the cr_inrs_ prefix
- Thread-safe configuration with the CHEMRISK_INRS_ env prefix

Key Components:
    - config: InrsConfig with CHEMRISK_INRS_ env prefix
    - models: Pydantic v2 models (17 enums, 8 data models)
    - reference_tables: NTP 937 tables and lookups
    - danger_classifier, volatility_classifier: ordinal classifiers
    - inhalation, dermal: detailed risk evaluators
    - hierarchy: hierarchization and Pareto selection
    - alerts: regulatory alert generator
    - inventory_validator: completeness checks
    - provenance: SHA-256 chain-hashed audit trails
    - metrics: Prometheus metrics
    - setup: ChemicalRiskService facade

Example:
    >>> from chemrisk.inrs import ChemicalAgent, compute_hierarchy
    >>> ranked = compute_hierarchy([
    ...     ChemicalAgent(id="a1", h_phrases=["H350"], quantity=5),
    ...     ChemicalAgent(id="a2", h_phrases=["H319"], quantity=50),
    ... ])
    >>> [r.agent_id for r in ranked]
    ['a1', 'a2']
"""

from __future__ import annotations

from chemrisk.inrs.alerts import generate_alerts, generate_all_alerts
from chemrisk.inrs.config import InrsConfig, get_config, reset_config, set_config
from chemrisk.inrs.danger_classifier import (
    danger_score,
    determine_danger_class,
    has_dermal_toxicity_phrases,
    with_derived_dermal_toxicity,
)
from chemrisk.inrs.dermal import evaluate_all_dermal, evaluate_dermal_risk
from chemrisk.inrs.hierarchy import (
    compute_hierarchy,
    pareto_agents,
    select_for_detailed_evaluation,
)
from chemrisk.inrs.inhalation import evaluate_all_inhalation, evaluate_inhalation_risk
from chemrisk.inrs.inventory_validator import validate_inventory
from chemrisk.inrs.models import (
    Alert,
    AlertSeverity,
    AlertType,
    AssessmentResult,
    ChemicalAgent,
    DermalFrequency,
    DermalResult,
    DermalSurface,
    FrequencyLevel,
    HierarchyResult,
    InhalationResult,
    InventoryIssue,
    InventoryValidationResult,
    LabelingSystem,
    ParticulateMatter,
    PhysicalState,
    Priority,
    ProcedureClass,
    QuantityUnit,
    RiskLevel,
    SolidForm,
    TimeReference,
    VentilationClass,
    VentilationMaintenance,
    VLAType,
)
from chemrisk.inrs.provenance import ProvenanceEntry, ProvenanceTracker
from chemrisk.inrs.setup import ChemicalRiskService, get_service, reset_service
from chemrisk.inrs.volatility_classifier import determine_volatility_class

__all__ = [
    # Configuration
    "InrsConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Enumerations
    "PhysicalState",
    "LabelingSystem",
    "VLAType",
    "ParticulateMatter",
    "TimeReference",
    "QuantityUnit",
    "SolidForm",
    "VentilationMaintenance",
    "FrequencyLevel",
    "ProcedureClass",
    "VentilationClass",
    "DermalSurface",
    "DermalFrequency",
    "RiskLevel",
    "Priority",
    "AlertType",
    "AlertSeverity",
    # Models
    "ChemicalAgent",
    "HierarchyResult",
    "InhalationResult",
    "DermalResult",
    "Alert",
    "InventoryIssue",
    "InventoryValidationResult",
    "AssessmentResult",
    # Engines
    "determine_danger_class",
    "danger_score",
    "has_dermal_toxicity_phrases",
    "with_derived_dermal_toxicity",
    "determine_volatility_class",
    "evaluate_inhalation_risk",
    "evaluate_all_inhalation",
    "evaluate_dermal_risk",
    "evaluate_all_dermal",
    "compute_hierarchy",
    "pareto_agents",
    "select_for_detailed_evaluation",
    "generate_alerts",
    "generate_all_alerts",
    "validate_inventory",
    # Provenance
    "ProvenanceEntry",
    "ProvenanceTracker",
    # Service
    "ChemicalRiskService",
    "get_service",
    "reset_service",
]
