"""Micropost service module.

Provides posting, deletion, per-user listings and the status feed.
"""

from microblog.services.microposts.service import MicropostService


__all__ = ["MicropostService"]
