"""Adapters – framework integrations for the exposition endpoint."""
