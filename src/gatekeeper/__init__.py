"""Gatekeeper — guards, оборачивающие каждую мутирующую точку входа пула.

- Reconciliation Guard: сверка tracked резервов с реальными балансами
- Reentrancy Guard: запрет вложенного входа в пул
"""

from .reconciliation import AssetReconciliation, ReconciliationGuard, ReconciliationResult
from .reentrancy import ReentrancyGuard

__all__ = [
    "AssetReconciliation",
    "ReconciliationGuard",
    "ReconciliationResult",
    "ReentrancyGuard",
]
