"""
Web application package for the minimax chess engine.

Provides a FastAPI-based JSON API for playing against the engine from a
browser or any HTTP client.
"""
