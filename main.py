import uvicorn

from smart_broadband.core.config import get_settings
from smart_broadband.main import configure_logging, create_app

settings = get_settings()
configure_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.uvicorn_host,
        port=settings.uvicorn_port,
        reload=settings.uvicorn_reload,
    )
