"""Reconciliation package for local vs. remote object set comparison."""
from reconciliation.differ import diff, missing_per_bag
from reconciliation.engine import ReconciliationEngine

__all__ = [
    'diff',
    'missing_per_bag',
    'ReconciliationEngine',
]
