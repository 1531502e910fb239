"""
Web application package for the QuickChess engine.

Provides a FastAPI-based REST API for playing against the engine: the
engine's reply at a chosen difficulty, undo, and position evaluation.
"""
