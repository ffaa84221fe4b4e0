# commanders_hub/services/__init__.py
"""
Services package exports.
"""
from .content_service import ContentService
from .events_service import EventsService
from .standings_service import StandingsService

__all__ = ["ContentService", "EventsService", "StandingsService"]
