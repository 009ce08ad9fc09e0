"""Microblog service: users, microposts, follows and feeds over PostgreSQL."""

__version__ = "0.1.0"
