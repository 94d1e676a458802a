"""Web framework integrations for registry-authz."""
