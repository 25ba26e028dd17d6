"""refmatch CLI - Main entry point.

Locates a reference image inside a saved screenshot.

Exit codes:
    0: Element found
    1: Element not found (score below threshold)
    2: Configuration error
    3: Decode or runtime error
"""

import sys

import click

from .. import __version__
from ..config_exceptions import ConfigurationError
from ..find.matchers import TemplateMatcher, get_metric
from ..hal.implementations import FileScreenCapture, PILImageDecoder
from ..logging import get_logger, setup_logging
from ..model.match import MatchConfig
from ..vision_exceptions import DecodeError
from .formatters import FORMATS, format_result

logger = get_logger(__name__)

# Exit codes
EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


def parse_polygon(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> list[tuple[float, float]] | None:
    """Parse ``"x,y x,y x,y"`` (spaces or semicolons between points)."""
    if value is None:
        return None

    points = []
    for token in value.replace(";", " ").split():
        try:
            x, y = token.split(",")
            points.append((float(x), float(y)))
        except ValueError as e:
            raise click.BadParameter(f"invalid point '{token}', expected x,y") from e
    return points


@click.group()
@click.version_option(version=__version__, prog_name="refmatch")
def main() -> None:
    """refmatch CLI - locate custom element images in screenshots."""


@main.command("match")
@click.argument("frame_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("reference_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--threshold", "-t", type=float, default=None, help="Minimum similarity (0-1)")
@click.option(
    "--rotation-step", type=float, default=0.0, show_default=True, help="Degrees per rotation step"
)
@click.option("--color", is_flag=True, help="Compare full color instead of grayscale")
@click.option("--mask", callback=parse_polygon, help='Mask polygon, e.g. "0,0 9,0 9,9"')
@click.option("--name", help="Label reported with the result")
@click.option(
    "--metric",
    type=click.Choice(["squared", "absolute"]),
    default="squared",
    show_default=True,
    help="Similarity metric",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker threads")
@click.option(
    "--format", "output_format", type=click.Choice(FORMATS), default="text", show_default=True
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def match_command(
    frame_path: str,
    reference_path: str,
    threshold: float | None,
    rotation_step: float,
    color: bool,
    mask: list[tuple[float, float]] | None,
    name: str | None,
    metric: str,
    workers: int | None,
    output_format: str,
    verbose: bool,
) -> None:
    """Find REFERENCE_PATH inside the screenshot FRAME_PATH."""
    setup_logging(level="DEBUG" if verbose else "WARNING", structured=False, colorize=False)

    try:
        options: dict = {
            "rotation_degree_per_step": rotation_step,
            "image_compare_format": "color" if color else "grayscale",
            "mask": mask,
            "name": name,
        }
        if threshold is not None:
            options["threshold"] = threshold
        config = MatchConfig(**options)

        decoder = PILImageDecoder()
        frame = FileScreenCapture(frame_path, decoder).capture()
        reference = decoder.decode(reference_path)

        matcher = TemplateMatcher(max_workers=workers, metric=get_metric(metric))
        result = matcher.match(frame, reference, config)
    except ConfigurationError as e:
        logger.debug("match_rejected", **e.to_dict())
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except DecodeError as e:
        logger.debug("decode_failed", **e.to_dict())
        click.echo(f"Decode error: {e}", err=True)
        sys.exit(EXIT_RUNTIME_ERROR)

    click.echo(format_result(result, output_format))
    sys.exit(EXIT_FOUND if result.found else EXIT_NOT_FOUND)


if __name__ == "__main__":
    main()
