"""Result formatters for CLI output.

Provides formatting for match results in multiple formats:
- JSON: Machine-readable format
- text: One human-readable line
"""

import json

from ..model.match import MatchResult

FORMATS = ("json", "text")


def format_result(result: MatchResult, format_type: str) -> str:
    """Format a match result in the specified format.

    Args:
        result: Match result to render
        format_type: Output format ("json" or "text")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return json.dumps(result.to_dict(), indent=2)
    elif format_type == "text":
        return _format_text(result)
    else:
        raise ValueError(f"Unknown format: {format_type}. Use one of {FORMATS}")


def _format_text(result: MatchResult) -> str:
    status = "FOUND" if result.found else "NOT FOUND"
    label = f"{result.name}: " if result.name else ""
    region = result.region
    return (
        f"{label}{status} at ({region.x}, {region.y}) size {region.width}x{region.height} "
        f"score={result.score:.4f} threshold={result.threshold:g} angle={result.angle:g}"
    )
