"""Infrastructure layer — snooze storage and evidence collaborators.

This layer depends on stdlib, pydantic, SQLAlchemy, and the domain value
models it loads and stores. It must never import from services,
commands, or output.
"""
