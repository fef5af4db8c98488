"""
Core package for the township incident dashboard.

Submodules provide data loading, joining, filtering, and user interface
rendering helpers that are orchestrated by the top-level `app.py`.
"""
