# gameday/__main__.py
from __future__ import annotations

import os

import uvicorn


def serve() -> None:
    """`python -m gameday` / `gameday-serve`: run the API under uvicorn."""
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("gameday.main:app", host=host, port=port)


if __name__ == "__main__":
    serve()
