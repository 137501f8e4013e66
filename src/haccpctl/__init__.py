"""haccpctl — food-safety compliance scoring and advisory CLI."""

__version__ = "0.3.0"
