"""
Pool — двухактивный constant-product пул.

ExchangePool (src.pool.exchange_pool) — открытый интерфейс; остальные
модули пакета — движки, которые он связывает.
"""
