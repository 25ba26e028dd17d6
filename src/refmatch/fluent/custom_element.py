"""Fluent builder for custom element steps.

Chained configuration calls ending in an execution trigger::

    result = (
        CustomElement("images/save_button.png")
        .named("save button")
        .threshold(0.85)
        .rotation_step(90)
        .color()
        .find(frame)
    )

Every configuration call re-validates the underlying MatchConfig, so an
invalid value fails at the call that introduced it.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..find.matchers import TemplateMatcher
from ..hal.interfaces.screen_capture import IScreenCapture
from ..locators import ElementLocator, ImageMatchStrategy
from ..model.element import Frame, ReferenceImage
from ..model.match import ImageCompareFormat, MatchConfig, MatchResult


class CustomElement:
    """A reference image plus the options used to look for it."""

    def __init__(self, reference: ReferenceImage | str | Path) -> None:
        """Start a builder for ``reference`` (decoded image or image path)."""
        self._target = reference
        self._config = MatchConfig()
        self._locator: ElementLocator | None = None
        self._strategy: ImageMatchStrategy | None = None

    # Configuration

    def threshold(self, value: float) -> CustomElement:
        self._config = self._config.evolve(threshold=value)
        return self

    def rotation_step(self, degrees: float) -> CustomElement:
        """Try rotated variants every ``degrees``; 0 disables rotation."""
        self._config = self._config.evolve(rotation_degree_per_step=degrees)
        return self

    def compare_format(self, compare_format: ImageCompareFormat | str) -> CustomElement:
        self._config = self._config.evolve(image_compare_format=compare_format)
        return self

    def grayscale(self) -> CustomElement:
        return self.compare_format(ImageCompareFormat.GRAYSCALE)

    def color(self) -> CustomElement:
        return self.compare_format(ImageCompareFormat.COLOR)

    def mask(self, polygon: Sequence[tuple[float, float]] | None) -> CustomElement:
        """Restrict comparison to the polygon (reference coordinates)."""
        self._config = self._config.evolve(mask=polygon)
        return self

    def named(self, name: str) -> CustomElement:
        self._config = self._config.evolve(name=name)
        return self

    def with_locator(self, locator: ElementLocator) -> CustomElement:
        self._locator = locator
        return self

    def with_capture(self, capture: IScreenCapture) -> CustomElement:
        """Use a locator with the default image strategy on ``capture``."""
        self._locator = ElementLocator(capture, [self._image_strategy()])
        return self

    def config(self) -> MatchConfig:
        """The validated configuration built so far."""
        return self._config

    # Execution

    def find(self, frame: Frame, matcher: TemplateMatcher | None = None) -> MatchResult:
        """Match against an already captured frame.

        A custom ``matcher`` still resolves path targets through this
        element's reference cache.
        """
        strategy = self._image_strategy()
        reference = strategy.resolve(self._target)
        return (matcher or strategy.matcher).match(frame, reference, self._config)

    def locate(self) -> MatchResult:
        """Capture one frame through the locator and match it."""
        return self._require_locator().locate(self._target, self._config)

    def wait_for(self, timeout: float | None = None, poll_interval: float | None = None) -> MatchResult:
        """Poll the locator until the element is found or ``timeout`` expires."""
        return self._require_locator().wait_for(
            self._target, self._config, timeout=timeout, poll_interval=poll_interval
        )

    def wait_until_found(
        self, timeout: float | None = None, poll_interval: float | None = None
    ) -> MatchResult:
        """Like :meth:`wait_for` but raise ElementNotFoundException on timeout."""
        return self._require_locator().wait_until_found(
            self._target, self._config, timeout=timeout, poll_interval=poll_interval
        )

    def _image_strategy(self) -> ImageMatchStrategy:
        if self._strategy is None:
            self._strategy = ImageMatchStrategy()
        return self._strategy

    def _require_locator(self) -> ElementLocator:
        if self._locator is None:
            raise RuntimeError("No locator configured; call with_locator() or with_capture() first")
        return self._locator

    def __repr__(self) -> str:
        return f"CustomElement({self._target!r}, {self._config!r})"
