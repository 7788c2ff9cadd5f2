"""Main entry point for the projects API.

Builds the application and serves it with uvicorn.
"""
import logging
import uvicorn
from dotenv import load_dotenv
from projects_api.api.app import create_app
from projects_api.config import Settings

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


def main():
    """Serve the API on the configured host and port."""
    settings = Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)
    logger.info(
        f"Serving projects of {settings.github_account} on {settings.host}:{settings.port}"
    )

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
