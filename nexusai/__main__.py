"""
Run the server: python -m nexusai
"""
import uvicorn

from nexusai.core.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("nexusai.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
