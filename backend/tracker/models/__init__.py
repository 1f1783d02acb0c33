from tracker.models.application import Application

__all__ = ["Application"]
