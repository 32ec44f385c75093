# -*- coding: utf-8 -*-
"""
INRS Chemical Risk Service Configuration

Centralized configuration for the INRS simplified chemical-risk
assessment service covering:
- Logging level for the ``chemrisk`` logger hierarchy
- Pareto interpretation of the hierarchization (cumulative threshold and
  automatic selection of agents for detailed evaluation)
- Dermal toxicity auto-detection from hazard phrases
- Inventory capacity limit per assessment run
- Provenance tracking (genesis hash, SHA-256 chain anchoring, chain size)
- Prometheus metrics export toggle

The NTP 937 scoring tables are published constants and are not part of
this configuration.

All settings can be overridden via environment variables with the
``CHEMRISK_INRS_`` prefix (e.g. ``CHEMRISK_INRS_PARETO_THRESHOLD``).

Environment Variable Reference (CHEMRISK_INRS_ prefix):
    CHEMRISK_INRS_LOG_LEVEL               - Logging level (DEBUG/INFO/WARNING/ERROR)
    CHEMRISK_INRS_PARETO_THRESHOLD        - Cumulative IPA percentage (0-100]
                                            that delimits priority agents
    CHEMRISK_INRS_AUTO_SELECT_PARETO      - Pre-select Pareto agents for
                                            detailed evaluation
    CHEMRISK_INRS_DERIVE_DERMAL_TOXICITY  - Derive the dermal toxicity flag
                                            from R/H phrases before scoring
    CHEMRISK_INRS_MAX_AGENTS              - Maximum agents per assessment run
    CHEMRISK_INRS_ENABLE_PROVENANCE       - Enable SHA-256 provenance chain
    CHEMRISK_INRS_GENESIS_HASH            - Genesis anchor for provenance chain
    CHEMRISK_INRS_MAX_PROVENANCE_ENTRIES  - Entries kept in the provenance chain
                                            before the oldest are evicted
    CHEMRISK_INRS_ENABLE_METRICS          - Enable Prometheus metrics export

Example:
    >>> from chemrisk.inrs.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.pareto_threshold, cfg.max_agents)
    80.0 10000

    >>> # Override for testing
    >>> from chemrisk.inrs.config import InrsConfig, set_config, reset_config
    >>> set_config(InrsConfig(pareto_threshold=90.0))
    >>> reset_config()  # teardown
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from chemrisk.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Environment variable prefix
# ---------------------------------------------------------------------------

_ENV_PREFIX = "CHEMRISK_INRS_"

# ---------------------------------------------------------------------------
# Valid log levels
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)


# ---------------------------------------------------------------------------
# InrsConfig
# ---------------------------------------------------------------------------


@dataclass
class InrsConfig:
    """Complete configuration for the INRS chemical risk service.

    Attributes:
        log_level: Logging verbosity applied to the ``chemrisk`` logger.
        pareto_threshold: Cumulative IPA percentage at which the Pareto
            interpretation stops adding agents (default 80.0).
        auto_select_pareto: When True, hierarchization results computed
            by the service are pre-selected for detailed evaluation
            using the Pareto threshold.
        derive_dermal_toxicity: When True, agents carrying a dermal
            R/H phrase get ``has_dermal_toxicity`` set before the dermal
            evaluation. A flag already set manually is never cleared.
        max_agents: Maximum agents accepted by a single service call.
        enable_provenance: Record SHA-256 provenance entries for every
            service operation.
        genesis_hash: Anchor string used as the root of the chain.
        max_provenance_entries: Entries kept in the provenance chain;
            older entries are evicted once it grows past this size.
        enable_metrics: When True, Prometheus metrics are recorded under
            the ``cr_inrs_`` prefix.
    """

    # -- Logging -------------------------------------------------------------
    log_level: str = "INFO"

    # -- Hierarchization interpretation --------------------------------------
    pareto_threshold: float = 80.0
    auto_select_pareto: bool = True

    # -- Dermal --------------------------------------------------------------
    derive_dermal_toxicity: bool = False

    # -- Capacity ------------------------------------------------------------
    max_agents: int = 10_000

    # -- Provenance tracking -------------------------------------------------
    enable_provenance: bool = True
    genesis_hash: str = "chemrisk-inrs-genesis"
    max_provenance_entries: int = 100_000

    # -- Metrics export ------------------------------------------------------
    enable_metrics: bool = True

    # ------------------------------------------------------------------
    # Post-init validation
    # ------------------------------------------------------------------

    def __post_init__(self) -> None:
        """Validate configuration constraints after initialisation.

        Raises:
            ConfigurationError: If any value is outside its valid range.
                The message lists every detected error.
        """
        errors: list[str] = []

        # -- Logging ---------------------------------------------------------
        normalised_log = self.log_level.upper()
        if normalised_log not in _VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {sorted(_VALID_LOG_LEVELS)}, "
                f"got '{self.log_level}'"
            )
        else:
            self.log_level = normalised_log

        # -- Pareto ----------------------------------------------------------
        if not (0.0 < self.pareto_threshold <= 100.0):
            errors.append(
                f"pareto_threshold must be in (0.0, 100.0], "
                f"got {self.pareto_threshold}"
            )

        # -- Capacity --------------------------------------------------------
        if self.max_agents <= 0:
            errors.append(
                f"max_agents must be > 0, got {self.max_agents}"
            )
        if self.max_agents > 1_000_000:
            errors.append(
                f"max_agents must be <= 1000000, got {self.max_agents}"
            )

        # -- Provenance ------------------------------------------------------
        if not self.genesis_hash:
            errors.append("genesis_hash must not be empty")
        if self.max_provenance_entries <= 0:
            errors.append(
                f"max_provenance_entries must be > 0, "
                f"got {self.max_provenance_entries}"
            )

        if errors:
            raise ConfigurationError(
                "InrsConfig validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors),
                errors=errors,
            )

        logger.debug(
            "InrsConfig validated successfully: "
            "pareto_threshold=%.1f, auto_select_pareto=%s, "
            "derive_dermal_toxicity=%s, max_agents=%d, "
            "provenance=%s, metrics=%s",
            self.pareto_threshold,
            self.auto_select_pareto,
            self.derive_dermal_toxicity,
            self.max_agents,
            self.enable_provenance,
            self.enable_metrics,
        )

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> InrsConfig:
        """Build an InrsConfig from environment variables.

        Every field can be overridden via ``CHEMRISK_INRS_<FIELD_UPPER>``.
        Boolean values accept ``true/1/yes`` (case-insensitive).
        Malformed numeric values fall back to the class-level default
        and emit a WARNING log.

        Returns:
            Populated InrsConfig instance, validated via ``__post_init__``.

        Example:
            >>> import os
            >>> os.environ["CHEMRISK_INRS_PARETO_THRESHOLD"] = "90"
            >>> InrsConfig.from_env().pareto_threshold
            90.0
        """
        prefix = _ENV_PREFIX

        def _env(name: str, default: Any = None) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}", default)

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.strip().lower() in ("true", "1", "yes")

        def _int(name: str, default: int) -> int:
            val = _env(name)
            if val is None:
                return default
            try:
                return int(val.strip())
            except ValueError:
                logger.warning(
                    "Invalid integer for %s%s=%r, using default %d",
                    prefix,
                    name,
                    val,
                    default,
                )
                return default

        def _float(name: str, default: float) -> float:
            val = _env(name)
            if val is None:
                return default
            try:
                return float(val.strip())
            except ValueError:
                logger.warning(
                    "Invalid float for %s%s=%r, using default %f",
                    prefix,
                    name,
                    val,
                    default,
                )
                return default

        def _str(name: str, default: str) -> str:
            val = _env(name)
            if val is None:
                return default
            return val.strip()

        config = cls(
            log_level=_str("LOG_LEVEL", cls.log_level),
            pareto_threshold=_float(
                "PARETO_THRESHOLD",
                cls.pareto_threshold,
            ),
            auto_select_pareto=_bool(
                "AUTO_SELECT_PARETO",
                cls.auto_select_pareto,
            ),
            derive_dermal_toxicity=_bool(
                "DERIVE_DERMAL_TOXICITY",
                cls.derive_dermal_toxicity,
            ),
            max_agents=_int("MAX_AGENTS", cls.max_agents),
            enable_provenance=_bool(
                "ENABLE_PROVENANCE",
                cls.enable_provenance,
            ),
            genesis_hash=_str("GENESIS_HASH", cls.genesis_hash),
            max_provenance_entries=_int(
                "MAX_PROVENANCE_ENTRIES",
                cls.max_provenance_entries,
            ),
            enable_metrics=_bool("ENABLE_METRICS", cls.enable_metrics),
        )

        logger.info(
            "InrsConfig loaded: "
            "log_level=%s, pareto_threshold=%.1f, auto_select_pareto=%s, "
            "derive_dermal_toxicity=%s, max_agents=%d, "
            "provenance=%s, metrics=%s",
            config.log_level,
            config.pareto_threshold,
            config.auto_select_pareto,
            config.derive_dermal_toxicity,
            config.max_agents,
            config.enable_provenance,
            config.enable_metrics,
        )
        return config

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the configuration to a plain dictionary.

        Returns:
            Dictionary of JSON-serialisable primitives.
        """
        return {
            "log_level": self.log_level,
            "pareto_threshold": self.pareto_threshold,
            "auto_select_pareto": self.auto_select_pareto,
            "derive_dermal_toxicity": self.derive_dermal_toxicity,
            "max_agents": self.max_agents,
            "enable_provenance": self.enable_provenance,
            "genesis_hash": self.genesis_hash,
            "max_provenance_entries": self.max_provenance_entries,
            "enable_metrics": self.enable_metrics,
        }


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[InrsConfig] = None
_config_lock = threading.Lock()


def get_config() -> InrsConfig:
    """Return the singleton InrsConfig, creating it from env if needed.

    Uses double-checked locking so the hot path takes no lock.

    Returns:
        InrsConfig singleton instance.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = InrsConfig.from_env()
    return _config_instance


def set_config(config: InrsConfig) -> None:
    """Replace the singleton InrsConfig.

    Args:
        config: New :class:`InrsConfig` to install as the singleton.
    """
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.info(
        "InrsConfig replaced programmatically: "
        "pareto_threshold=%.1f, auto_select_pareto=%s, max_agents=%d",
        config.pareto_threshold,
        config.auto_select_pareto,
        config.max_agents,
    )


def reset_config() -> None:
    """Reset the singleton so the next :func:`get_config` re-reads env."""
    global _config_instance
    with _config_lock:
        _config_instance = None
    logger.debug("InrsConfig singleton reset")


# ---------------------------------------------------------------------------
# Public surface
# ---------------------------------------------------------------------------

__all__ = [
    "InrsConfig",
    "get_config",
    "set_config",
    "reset_config",
]
