"""Republish a public Google Sheet as JSON for the site frontend."""

__version__ = "1.0.0"
