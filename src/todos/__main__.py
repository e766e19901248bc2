"""Run the API with uvicorn: ``python -m todos``."""
import uvicorn

from todos.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "todos.adapters.fastapi.app:app_factory",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
