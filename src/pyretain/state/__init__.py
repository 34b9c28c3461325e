"""State/store layer.

This package owns the save file and the in-memory per-screen tag state
derived from it.
"""
