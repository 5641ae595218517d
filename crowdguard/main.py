# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from . import __version__
from .api.v1 import monitor_router
from .api.v1.dependencies import set_monitor_session
from .application import MonitorSession
from .core.config import get_settings
from .infrastructure.http_client_factory import close_shared_http_client
from .infrastructure.notifications import WebSocketManager

logger = logging.getLogger(__name__)

# Global instances
_monitor_session: Optional[MonitorSession] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Builds the monitor session (pipeline, voice queue, WebSocket manager)
    and releases its capability handles on shutdown. Monitoring itself
    starts on POST /api/v1/monitor/start.
    """
    global _monitor_session

    _monitor_session = MonitorSession(
        settings=get_settings(),
        websocket_manager=WebSocketManager(),
    )
    set_monitor_session(_monitor_session)
    logger.info("Monitor session initialized")

    yield

    # Shutdown: stop the frame loop, silence voice, close pooled connections
    try:
        await _monitor_session.aclose()
    except Exception as e:
        logger.error(f"Error closing monitor session: {e}", exc_info=True)
    finally:
        set_monitor_session(None)
        _monitor_session = None

    await close_shared_http_client()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    application = FastAPI(
        title="CrowdGuard API",
        version=__version__,
        description="Real-time crowd monitoring: occupancy, behavior alerts and voice announcements",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(monitor_router, prefix="/api/v1/monitor")

    return application


# Create application instance
app = create_application()
