"""
Main entry point for snapboard.

Starts the API server.
"""

import sys
import uvicorn

from snapboard.api import create_app
from snapboard.shared import get_settings


def main():
    """Main entry point."""
    if len(sys.argv) > 1 and sys.argv[1] == "serve":
        settings = get_settings()
        app = create_app(settings)
        
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level=settings.log_level.lower()
        )
    else:
        print("snapboard - whiteboard photo to Miro board")
        print("")
        print("Usage:")
        print("  python -m snapboard serve    # Start API server")
        print("")
        print("API Documentation:")
        print("  http://localhost:3000/docs    # Swagger UI")


if __name__ == "__main__":
    main()
