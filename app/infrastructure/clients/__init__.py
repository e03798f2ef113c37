"""Clients for external services used by the infrastructure layer."""
