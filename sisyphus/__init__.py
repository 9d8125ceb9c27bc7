"""Sisyphus: push the boulder once a day, or watch it roll back down."""

__version__ = "1.0.0"
