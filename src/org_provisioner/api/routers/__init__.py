"""
org_provisioner.api.routers

HTTP routers, one module per surface (health, dev tokens, organization, principals).
"""
