"""
services/ - Business Logic Layer
================================
The ledger aggregator (pure derived-metric functions), input validation,
the LedgerStore that owns every collection, and exports.
"""
