"""CLI entry point for launching the Pokédex service with Uvicorn."""
import logging

import uvicorn

from .main import create_app


def main() -> None:
    """Start a development server."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
