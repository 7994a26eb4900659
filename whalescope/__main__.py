"""Command-line entry point for the WhaleScope API server."""

import uvicorn

from whalescope.config import get_server_config, validate_config
from whalescope.logging_config import configure_logging


def main():
    """Run the WhaleScope API server."""
    server_config = get_server_config()
    configure_logging(server_config.log_level)
    validate_config()

    uvicorn.run(
        "whalescope.api.app:create_application",
        factory=True,
        host=server_config.host,
        port=server_config.port,
        log_level=server_config.log_level.lower(),
        reload=server_config.debug
    )


if __name__ == "__main__":
    main()
