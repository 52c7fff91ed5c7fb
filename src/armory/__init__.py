"""Armory: a web console for payload, encoder and exploit plugins."""

__version__ = "0.1.0"
