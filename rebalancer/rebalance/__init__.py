"""Rebalance Calculation Layer.

Components:
- Calculator: Computes ordered rebalancing orders
- CalculatorConfig: Fractional-share, slot-size and price-selector settings
"""

from rebalancer.rebalance.calculator import Calculator, CalculatorConfig

__all__ = [
    "Calculator",
    "CalculatorConfig",
]
