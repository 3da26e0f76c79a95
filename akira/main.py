import uvicorn

from akira.core import settings
from akira.core.register import register_app
from akira.logger import logger

app = register_app()


def main():
    logger.info(f"Listening on {settings.UVICORN_HOST}:{settings.UVICORN_PORT}. Ctrl+C to exit.")
    uvicorn.run(
        "akira.main:app",
        host=settings.UVICORN_HOST,
        port=settings.UVICORN_PORT,
        reload=settings.UVICORN_RELOAD,
    )


if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        logger.error(f'Akira stopped with error: {e}')
        raise
