"""Domain layer — scoring rules, advisory logic, and review aggregation.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
