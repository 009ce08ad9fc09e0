"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn microblog.main:app --reload

    # Production
    uvicorn microblog.main:app --workers 4
"""

from microblog.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from microblog.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "microblog.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
