"""
org_provisioner.provisioning

Provisioning request handling.

Responsibilities:
- Request/response contracts, request validation, permission gate.
- Pure builders turning a request into tenant/domain/admin principal records.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O; sequencing lives in `orchestrator`.
