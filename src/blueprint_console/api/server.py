"""
ASGI Entry Point for the blueprint console.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` first so that the settings read at
import time see them.

Usage
-----
Run via the module entry point:
    $ python -m blueprint_console.api.server

Or via uvicorn directly:
    $ uvicorn blueprint_console.api.server:app --reload

Set `BPCONSOLE_DEMO=1` to seed the in-process platform with sample modules.
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Load .env BEFORE importing the application factory: settings are read at import time.
load_dotenv(dotenv_path=Path(".env"))

from blueprint_console.api.app import create_app  # noqa: E402
from blueprint_console.core.settings import load_settings  # noqa: E402

app = create_app()


def main() -> None:
    """Run the console server locally for development."""
    cfg = load_settings()
    uvicorn.run(
        "blueprint_console.api.server:app",
        host=cfg.host,
        port=cfg.port,
        reload=cfg.is_dev,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
