"""Domain layer — records, error kinds, and clock providers.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
