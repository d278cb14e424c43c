"""Main entry point for the FastAPI server."""

import os
from typing import Optional

import uvicorn
from dotenv import load_dotenv


def main(host: Optional[str] = None, port: Optional[int] = None):
    """Start the FastAPI server."""
    # Load environment variables from .env file
    load_dotenv()
    host = host or os.getenv("API_HOST", "0.0.0.0")
    port = port or int(os.getenv("API_PORT", "8000"))
    reload = os.getenv("API_RELOAD", "false").lower() == "true"

    uvicorn.run(
        "formulator.api.endpoints:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )


if __name__ == "__main__":
    main()
