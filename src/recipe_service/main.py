"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_service.main:app --reload

    # Production
    python -m recipe_service.main
"""

from recipe_service.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from recipe_service.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "recipe_service.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
