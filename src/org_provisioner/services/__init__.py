"""
org_provisioner.services

Service-layer package.

Responsibilities:
- Own the outcome of multi-step operations and their audit trail.
- Orchestrate calls across the directory store, cache, and pipeline graph.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake stores and caches.
