"""Application lifecycle events."""

from microblog.core.events.lifespan import lifespan


__all__ = ["lifespan"]
