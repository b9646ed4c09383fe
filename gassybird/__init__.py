"""Game model for a side-scrolling bird arcade game: geometry, events, actors, resources, obstacles and characters."""

__version__ = "0.1.0"
__all__ = ["actors", "characters", "events", "geometry", "obstacles", "resources"]