"""
org_provisioner.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- Caller access context (`AccessToken`) and the permission vocabulary.
- FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Permission decisions are made from token claims only; nothing here touches the DB.
