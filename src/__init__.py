"""Top-level package for the project.

Tests and callers import submodules with absolute names, e.g.
``from src.layout_engine import compute_layout``.
"""
