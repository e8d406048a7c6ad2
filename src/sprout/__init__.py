"""Sprout: a small tree-walking interpreter for a numeric scripting language."""

__version__ = "0.1.0"
