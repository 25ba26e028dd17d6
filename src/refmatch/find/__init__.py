"""Find package - locating reference images inside frames."""

from .matchers import TemplateMatcher, match

__all__ = ["TemplateMatcher", "match"]
