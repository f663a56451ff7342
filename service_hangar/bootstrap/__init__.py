"""Composition root helpers."""

from .runtime import create_runtime, Runtime

__all__ = ["Runtime", "create_runtime"]
