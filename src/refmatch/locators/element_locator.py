"""ElementLocator - runs locator strategies against captured frames.

The locator owns the retry policy: the matcher answers for one frame, and
``wait_for`` keeps capturing fresh frames until the element appears or the
timeout expires.
"""

from __future__ import annotations

import time
from typing import Any

from ..config import get_settings
from ..hal.interfaces.screen_capture import IScreenCapture
from ..logging import LogContext, get_logger
from ..model.match import MatchConfig, MatchResult
from ..vision_exceptions import ElementNotFoundException
from .strategies import ImageMatchStrategy, LocatorStrategy, ScreenContext

logger = get_logger(__name__)


class ElementLocator:
    """Locate elements on frames supplied by a capture collaborator.

    Attributes:
        capture: Frame supplier
        strategies: Strategies tried in order; the first that can handle a
            target is used
    """

    def __init__(
        self,
        capture: IScreenCapture,
        strategies: list[LocatorStrategy] | None = None,
    ) -> None:
        self.capture = capture
        self.strategies = strategies if strategies is not None else [ImageMatchStrategy()]

    def strategy_for(self, target: Any) -> LocatorStrategy:
        """Pick the first strategy that can handle ``target``.

        Raises:
            TypeError: If no strategy handles the target type
        """
        for strategy in self.strategies:
            if strategy.can_handle(target):
                return strategy
        raise TypeError(f"No locator strategy can handle target of type {type(target).__name__}")

    def locate(self, target: Any, config: MatchConfig | None = None) -> MatchResult:
        """Capture one frame and locate ``target`` in it.

        Args:
            target: Element description (e.g. ReferenceImage or image path)
            config: Match configuration; defaults to ``MatchConfig()``

        Returns:
            MatchResult for the captured frame
        """
        config = config or MatchConfig()
        strategy = self.strategy_for(target)
        context = ScreenContext(frame=self.capture.capture())
        return strategy.locate(target, config, context)

    def wait_for(
        self,
        target: Any,
        config: MatchConfig | None = None,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> MatchResult:
        """Poll until ``target`` is found or ``timeout`` expires.

        At least one attempt is always made. Configuration and decode errors
        are not retried.

        Args:
            target: Element description
            config: Match configuration
            timeout: Seconds to keep trying; defaults to ``RefmatchSettings.wait_timeout``
            poll_interval: Seconds between attempts; defaults to
                ``RefmatchSettings.poll_interval``

        Returns:
            The first found result, or the last result when the timeout expires
        """
        settings = get_settings()
        config = config or MatchConfig()
        timeout = settings.wait_timeout if timeout is None else timeout
        poll_interval = settings.poll_interval if poll_interval is None else poll_interval
        strategy = self.strategy_for(target)

        deadline = time.monotonic() + timeout
        attempts = 0
        with LogContext(logger, name=config.name, strategy=strategy.get_name()) as log:
            while True:
                attempts += 1
                context = ScreenContext(frame=self.capture.capture())
                result = strategy.locate(target, config, context)
                if result.found:
                    log.info(
                        "element_found",
                        attempts=attempts,
                        score=result.score,
                        x=result.x,
                        y=result.y,
                    )
                    return result

                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    log.info(
                        "element_wait_timeout",
                        attempts=attempts,
                        best_score=result.score,
                        timeout=timeout,
                    )
                    return result
                time.sleep(min(poll_interval, remaining))

    def wait_until_found(
        self,
        target: Any,
        config: MatchConfig | None = None,
        timeout: float | None = None,
        poll_interval: float | None = None,
    ) -> MatchResult:
        """Like :meth:`wait_for` but raise when the element never appears.

        Raises:
            ElementNotFoundException: If the timeout expires without a match
        """
        config = config or MatchConfig()
        result = self.wait_for(target, config, timeout=timeout, poll_interval=poll_interval)
        if not result.found:
            raise ElementNotFoundException(
                config.name or str(target),
                timeout=timeout if timeout is not None else get_settings().wait_timeout,
                best_score=result.score,
            )
        return result
