# -*- coding: utf-8 -*-
"""
Provenance Tracking for INRS Chemical Risk Assessments

SHA-256 chain-hashed audit trail of every assessment operation run
through :class:`~chemrisk.inrs.setup.ChemicalRiskService`. Each entry
stores the hash of the operation payload (agents in, results out) and is
linked to the previous entry, so that a recorded assessment can later be
shown to match the inventory it was computed from.

Entity Types:
    - agent: A single chemical agent of the inventory
    - inventory: A whole agent inventory (validation)
    - hierarchy: Potential-risk hierarchization runs
    - inhalation: Inhalation risk evaluations
    - dermal: Dermal risk evaluations
    - alert: Alert generation runs
    - assessment: Complete assessment pipeline runs

Actions:
    classify_danger, compute_hierarchy, select_agents,
    evaluate_inhalation, evaluate_dermal, generate_alerts,
    validate_inventory, run_assessment

Example:
    >>> from chemrisk.inrs.provenance import ProvenanceTracker
    >>> tracker = ProvenanceTracker()
    >>> entry = tracker.record("hierarchy", "compute_hierarchy", "run-1")
    >>> tracker.verify_chain()
    True
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from chemrisk.exceptions import ProvenanceError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    """Return current UTC datetime with microseconds zeroed."""
    return datetime.now(timezone.utc).replace(microsecond=0)


VALID_ENTITY_TYPES = frozenset({
    "agent",
    "inventory",
    "hierarchy",
    "inhalation",
    "dermal",
    "alert",
    "assessment",
})

VALID_ACTIONS = frozenset({
    "classify_danger",
    "compute_hierarchy",
    "select_agents",
    "evaluate_inhalation",
    "evaluate_dermal",
    "generate_alerts",
    "validate_inventory",
    "run_assessment",
})


# ---------------------------------------------------------------------------
# ProvenanceEntry
# ---------------------------------------------------------------------------


@dataclass
class ProvenanceEntry:
    """A single tamper-evident provenance record.

    Attributes:
        entity_type: One of :data:`VALID_ENTITY_TYPES`.
        entity_id: Identifier of the agent, run or inventory.
        action: One of :data:`VALID_ACTIONS`.
        hash_value: Chain hash of this entry.
        parent_hash: Chain hash of the preceding entry (genesis for the first).
        timestamp: UTC ISO timestamp.
        metadata: ``data_hash`` plus caller-supplied context.
    """

    entity_type: str
    entity_id: str
    action: str
    hash_value: str
    parent_hash: str
    timestamp: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def data_hash(self) -> str:
        """SHA-256 of the payload recorded with this entry."""
        return self.metadata.get("data_hash", "")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the entry to a plain dictionary."""
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "action": self.action,
            "hash_value": self.hash_value,
            "parent_hash": self.parent_hash,
            "timestamp": self.timestamp,
            "metadata": self.metadata,
        }


# ---------------------------------------------------------------------------
# Hashing helpers
# ---------------------------------------------------------------------------


def hash_data(data: Optional[Any]) -> str:
    """SHA-256 of ``data`` serialized as canonical JSON.

    Pydantic models are dumped in JSON mode first; lists of models are
    dumped element by element.
    """
    if data is None:
        serialized = "null"
    else:
        serialized = json.dumps(_jsonable(data), sort_keys=True, default=str)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def _jsonable(data: Any) -> Any:
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {str(k): _jsonable(v) for k, v in data.items()}
    return data


def _chain_hash(parent_hash: str, data_hash: str, action: str, timestamp: str) -> str:
    combined = json.dumps(
        {
            "action": action,
            "data_hash": data_hash,
            "parent_hash": parent_hash,
            "timestamp": timestamp,
        },
        sort_keys=True,
    )
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# ProvenanceTracker
# ---------------------------------------------------------------------------


class ProvenanceTracker:
    """In-memory SHA-256 provenance chain for assessment operations.

    Thread-safe: every mutation and read of the chain happens under a
    reentrant lock.

    With ``max_entries`` set, the oldest entries are evicted once the
    chain grows past that size. The hash of the last evicted entry
    becomes the anchor that :meth:`verify_chain` starts from.
    """

    def __init__(
        self,
        genesis_hash: str = "chemrisk-inrs-genesis",
        max_entries: Optional[int] = None,
    ) -> None:
        if not genesis_hash:
            raise ProvenanceError("genesis_hash must not be empty")
        if max_entries is not None and max_entries <= 0:
            raise ProvenanceError(
                f"max_entries must be > 0, got {max_entries}",
                context={"max_entries": max_entries},
            )
        self._genesis_hash: str = hashlib.sha256(
            genesis_hash.encode("utf-8")
        ).hexdigest()
        self._max_entries = max_entries
        self._chain: List[ProvenanceEntry] = []
        self._anchor_hash: str = self._genesis_hash
        self._last_chain_hash: str = self._genesis_hash
        self._evicted_count: int = 0
        self._lock = threading.RLock()
        logger.info(
            "ProvenanceTracker initialized with genesis hash prefix=%s, "
            "max_entries=%s",
            self._genesis_hash[:16],
            max_entries,
        )

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record(
        self,
        entity_type: str,
        action: str,
        entity_id: str,
        data: Optional[Any] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProvenanceEntry:
        """Append an entry for one operation.

        Args:
            entity_type: One of :data:`VALID_ENTITY_TYPES`.
            action: One of :data:`VALID_ACTIONS`.
            entity_id: Identifier of the entity the action applies to.
            data: Optional payload; only its hash is stored.
            metadata: Optional extra context stored with the entry. A
                ``data_hash`` key is always replaced by the payload hash.

        Returns:
            The new :class:`ProvenanceEntry`.

        Raises:
            ProvenanceError: If the entity type or action is unknown, or
                ``entity_id`` is empty.
        """
        if entity_type not in VALID_ENTITY_TYPES:
            raise ProvenanceError(
                f"Unknown provenance entity type '{entity_type}'",
                context={"entity_type": entity_type},
            )
        if action not in VALID_ACTIONS:
            raise ProvenanceError(
                f"Unknown provenance action '{action}'",
                context={"action": action},
            )
        if not entity_id:
            raise ProvenanceError("entity_id must not be empty")

        timestamp = _utcnow().isoformat()
        data_hash = hash_data(data)
        entry_metadata: Dict[str, Any] = dict(metadata or {})
        entry_metadata["data_hash"] = data_hash

        with self._lock:
            parent_hash = self._last_chain_hash
            entry = ProvenanceEntry(
                entity_type=entity_type,
                entity_id=entity_id,
                action=action,
                hash_value=_chain_hash(parent_hash, data_hash, action, timestamp),
                parent_hash=parent_hash,
                timestamp=timestamp,
                metadata=entry_metadata,
            )
            self._chain.append(entry)
            self._last_chain_hash = entry.hash_value
            if self._max_entries is not None and len(self._chain) > self._max_entries:
                overflow = len(self._chain) - self._max_entries
                self._anchor_hash = self._chain[overflow - 1].hash_value
                del self._chain[:overflow]
                self._evicted_count += overflow

        logger.debug(
            "Recorded provenance: %s/%s action=%s hash_prefix=%s",
            entity_type,
            entity_id[:16],
            action,
            entry.hash_value[:16],
        )
        return entry

    # ------------------------------------------------------------------
    # Verification and queries
    # ------------------------------------------------------------------

    def verify_chain(self) -> bool:
        """Recompute every link of the chain.

        Returns:
            ``True`` when each entry chains from its predecessor (the
            genesis hash, or the last evicted entry, for the first) and
            its hash matches its content.
        """
        with self._lock:
            chain = list(self._chain)
            parent = self._anchor_hash

        for i, entry in enumerate(chain):
            if entry.parent_hash != parent:
                logger.warning(
                    "verify_chain: chain break before entry[%d]", i
                )
                return False
            expected = _chain_hash(
                entry.parent_hash,
                entry.data_hash,
                entry.action,
                entry.timestamp,
            )
            if entry.hash_value != expected:
                logger.warning(
                    "verify_chain: entry[%d] hash does not match its content", i
                )
                return False
            parent = entry.hash_value

        logger.debug("verify_chain: %d entries verified successfully", len(chain))
        return True

    def get_entries(
        self,
        entity_type: Optional[str] = None,
        action: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ProvenanceEntry]:
        """Entries filtered by type and action, oldest first.

        With ``limit`` only the most recent matching entries are kept.
        """
        with self._lock:
            entries = list(self._chain)
        if entity_type:
            entries = [e for e in entries if e.entity_type == entity_type]
        if action:
            entries = [e for e in entries if e.action == action]
        if limit is not None and limit > 0 and len(entries) > limit:
            entries = entries[-limit:]
        return entries

    def get_entity_chain(self, entity_id: str) -> List[ProvenanceEntry]:
        """Every entry recorded for ``entity_id``, oldest first."""
        with self._lock:
            return [e for e in self._chain if e.entity_id == entity_id]

    def export_json(self) -> str:
        """The whole chain as indented JSON."""
        with self._lock:
            payload = [entry.to_dict() for entry in self._chain]
        return json.dumps(payload, indent=2, default=str)

    def reset(self) -> None:
        """Drop every entry and return to the genesis state."""
        with self._lock:
            self._chain.clear()
            self._anchor_hash = self._genesis_hash
            self._last_chain_hash = self._genesis_hash
            self._evicted_count = 0
        logger.info("ProvenanceTracker reset to genesis state")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def entry_count(self) -> int:
        with self._lock:
            return len(self._chain)

    @property
    def genesis_hash(self) -> str:
        return self._genesis_hash

    @property
    def max_entries(self) -> Optional[int]:
        return self._max_entries

    @property
    def evicted_count(self) -> int:
        """Entries dropped from the head of a bounded chain."""
        with self._lock:
            return self._evicted_count

    @property
    def last_chain_hash(self) -> str:
        with self._lock:
            return self._last_chain_hash

    def __len__(self) -> int:
        return self.entry_count

    def __repr__(self) -> str:
        return (
            f"ProvenanceTracker(entries={self.entry_count}, "
            f"genesis_prefix={self._genesis_hash[:12]})"
        )


__all__ = [
    "VALID_ENTITY_TYPES",
    "VALID_ACTIONS",
    "ProvenanceEntry",
    "ProvenanceTracker",
    "hash_data",
]
