"""Follow service module.

Maintains the directed follow graph between users.
"""

from microblog.services.follows.service import FollowCounts, FollowService


__all__ = ["FollowCounts", "FollowService"]
