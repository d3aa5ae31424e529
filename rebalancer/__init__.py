"""Portfolio rebalancer.

Computes the limit orders that move a portfolio toward a weighted target
model, folding equivalent holdings into their model asset.
"""

__version__ = "0.1.0"
