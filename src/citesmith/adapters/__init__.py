"""Adapters binding the citation core to third-party libraries."""
