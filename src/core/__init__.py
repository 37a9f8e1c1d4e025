"""
Core domain models, integer math primitives, configuration and contracts.

This module contains the foundational building blocks that are independent
of external collaborators (asset ledgers, hosting ledger, indexers).
"""
