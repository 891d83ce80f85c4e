"""Dependency injection."""

from token_sniper.DI.container import Container

__all__ = ["Container"]
