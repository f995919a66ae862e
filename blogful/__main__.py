"""Run the API with uvicorn: ``python -m blogful``."""
import uvicorn

from blogful.config import settings


def main():
    uvicorn.run(
        "blogful.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=not settings.is_production,
        # Access lines come from AccessLogMiddleware.
        access_log=False,
    )


if __name__ == "__main__":
    main()
