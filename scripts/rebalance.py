#!/usr/bin/env python3
"""Rebalance CLI tool.

Prints the orders that move the demo portfolio toward its model.

Examples:
    # Orders for the bundled fixtures
    python scripts/rebalance.py orders

    # Allow fractional shares and spend at most $2,500
    python scripts/rebalance.py orders --fractional --limit 2500

    # Validate a model definition
    python scripts/rebalance.py validate-model rebalancer/data/fixtures/model-syfe-core.json
"""

from rebalancer.cli import cli

if __name__ == "__main__":
    cli()
