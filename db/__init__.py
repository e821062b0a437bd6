"""
db/ - Storage Layer
===================
Storage drivers: a JSON-file key/value store for the 'local' backend and
the PostgreSQL connection pool and schema for the 'postgres' backend.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
