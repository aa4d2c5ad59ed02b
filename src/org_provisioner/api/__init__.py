"""
org_provisioner.api

API package for the organization provisioning service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and error rendering.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: auth + request bytes in, delegation to services.
