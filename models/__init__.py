from models.health_event import AffectedEntity, Detail, EventDescriptionRow

__all__ = ["AffectedEntity", "Detail", "EventDescriptionRow"]
