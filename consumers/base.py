from __future__ import annotations

from abc import ABC, abstractmethod

from models.health_event import Detail


class DetailConsumer(ABC):
    """Receives every successfully decoded health event.

    The receiver calls ``process()`` once per event, in registration order.
    A consumer that raises is logged by the receiver and does not stop the
    consumers after it.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def process(self, detail: Detail) -> None:
        """Handle a single decoded event.  Subclasses implement this."""
