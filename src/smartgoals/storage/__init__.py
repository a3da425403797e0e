"""Concrete KeyValueStore implementations used by the CLI."""
