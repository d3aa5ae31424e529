"""User-friendly APIs for the portfolio rebalancer.

Components:
- RebalanceAPI: Order calculation, weight review and tabular formatting
"""

from rebalancer.api.rebalance_api import RebalanceAPI, RebalanceResult

__all__ = [
    "RebalanceAPI",
    "RebalanceResult",
]
