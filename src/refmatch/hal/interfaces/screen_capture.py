"""Screen capture interface definition.

Capturing the screen is the job of an external collaborator; the matcher
only consumes the frames it produces.
"""

from abc import ABC, abstractmethod

from ...model.element import Frame


class IScreenCapture(ABC):
    """Interface for frame suppliers."""

    @abstractmethod
    def capture(self) -> Frame:
        """Capture a fresh frame.

        Returns:
            Fully materialized Frame
        """
        pass
