"""Domain layer — tag grammar, host splitting, and tag guessing.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
