"""Scarff: scaffold new projects from templates matched to a resolved target."""

__version__ = "0.1.0"
