"""
utils/ - Shared Utilities
=========================
Logging, constants, date helpers, formatting and the exception taxonomy.
Nothing here depends on the other layers.
"""
