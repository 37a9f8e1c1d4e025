"""
Ledger — внешние коллабораторы пула.

- AssetLedger: потребляемый интерфейс fungible-актива
- HostLedger: сериализация вызовов, монотонное время, откат
- InMemoryAssetLedger / FeeOnTransferLedger: эталонные активы для тестов
"""

from src.ledger.erc20 import FeeOnTransferLedger, InMemoryAssetLedger
from src.ledger.host import HostLedger
from src.ledger.interface import AssetLedger, Checkpointable

__all__ = [
    "AssetLedger",
    "Checkpointable",
    "HostLedger",
    "InMemoryAssetLedger",
    "FeeOnTransferLedger",
]
