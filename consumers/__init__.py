from consumers.base import DetailConsumer
from consumers.log import LogConsumer

__all__ = ["DetailConsumer", "LogConsumer"]
