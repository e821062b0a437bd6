"""
models/ - Domain Layer
======================
Plain dataclasses for every entity the ledger tracks, plus the
report types produced by the aggregator.
"""
