"""
org_provisioner.orchestrator

Orchestration package (LangGraph pipeline).

Responsibilities:
- Typed pipeline state, provisioning steps, and graph compilation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should go through `services.provisioning_service`, which owns
# authorization, validation, and the audit trail around the graph.
