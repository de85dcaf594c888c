"""Room domain services: grid helpers, registry, simulation and game loop.

This package holds the authoritative game logic. Socket handlers and HTTP
routes import from here; nothing in here knows about Flask requests.
"""
