"""Utility entry points for inspecting routes outside the product UI."""

from .preview_route import load_route

__all__ = ["load_route"]
