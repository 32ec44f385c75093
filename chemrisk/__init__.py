"""
ChemRisk: Simplified Chemical Risk Assessment
=============================================

Deterministic implementation of the INRS simplified chemical-risk
assessment methodology (NTP 937 / ND 2233-200-05). Scoring logic lives
in :mod:`chemrisk.inrs`.
"""

from ._version import __version__

__author__ = "ChemRisk Team"
__license__ = "MIT"

__all__ = ["__version__"]
