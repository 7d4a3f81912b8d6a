"""Interface adapters (UI entry points)."""

__all__ = []
