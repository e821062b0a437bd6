"""
repositories/ - Data Access Layer
==================================
Each repository is the persistence provider for one collection.
Repositories read raw records from storage and return domain model objects.
Two backends exist: JSON documents in local storage and PostgreSQL tables.
"""
