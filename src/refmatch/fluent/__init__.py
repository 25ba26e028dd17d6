"""Fluent API for building custom element steps."""

from .custom_element import CustomElement

__all__ = ["CustomElement"]
