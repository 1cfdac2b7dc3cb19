"""Decap CMS OAuth relay.

Lets the Decap CMS admin UI obtain a GitHub access token without shipping
the OAuth client secret to the browser:
- /auth redirects the popup to GitHub's authorize page
- /callback exchanges the code for a token and posts it to the opener
- every other path identifies the server

Entry point for `uvicorn main:app`. Importing this module loads the
environment, configures logging and builds the app; the CLI and the tests
use server.create_app instead.
"""
import logging

from config import load_config, load_env_files
from logging_config import setup_logging
from server import create_app, log_startup

logger = logging.getLogger(__name__)

load_env_files()
config = load_config()
setup_logging(level=config.log_level, log_format=config.log_format)
log_startup(config)

app = create_app(config)


if __name__ == "__main__":
    import uvicorn
    logger.info(f"[STARTUP] Listening on {config.host}:{config.port}")
    uvicorn.run(app, host=config.host, port=config.port)
