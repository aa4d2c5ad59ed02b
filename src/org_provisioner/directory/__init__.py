"""
org_provisioner.directory

Directory package: principal record model, store contract, and read-side cache.

Responsibilities:
- Define the generic principal record exchanged with the store.
- Provide the default SQL-backed directory store and principal cache.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends only on the `DirectoryStore` protocol and the cache's
# `invalidate` contract; concrete classes are wired in the API layer.
