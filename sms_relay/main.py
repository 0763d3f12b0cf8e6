"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from sms_relay.adapters.inbound.http.routes import router
from sms_relay.domain.errors import ConfigurationError
from sms_relay.infrastructure.config.settings import ensure_required_settings, settings
from sms_relay.infrastructure.logging.logger import logger
from sms_relay.infrastructure.scheduling.session_sweeper import SessionSweeper
from sms_relay.infrastructure.wiring.dependencies import (
    get_handle_inbound_message_use_case,
    get_session_store,
)

# Load environment variables from .env file
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Aborts startup when required configuration or collaborator credentials
    are missing, and runs the session expiry sweep for the lifetime of the app.
    """
    try:
        ensure_required_settings()
        # Builds the Twilio and OpenAI clients once, ahead of the first request
        get_handle_inbound_message_use_case()
    except (ConfigurationError, ValueError) as e:
        logger.error("ERROR: %s", e)
        raise SystemExit(1) from e

    logger.info("Using Assistant ID: %s", settings.openai_assistant_id)

    sweeper = SessionSweeper(get_session_store(), settings.session_sweep_interval_seconds)
    sweeper.start()
    try:
        yield
    finally:
        await sweeper.stop()


app = FastAPI(
    title="Lionhead SMS Relay",
    description="Relays inbound SMS to an OpenAI assistant and texts back its replies",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(router)


def run() -> None:
    """Run the API server with uvicorn."""
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
