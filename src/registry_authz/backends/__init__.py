"""Cluster authorization backends for registry-authz."""
