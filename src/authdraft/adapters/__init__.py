"""Adapters connecting the conversion core to external services."""
