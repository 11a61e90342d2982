"""Adapters binding application ports to external tools."""
