"""
Utility helpers shared across the CLI and the engine.
"""
