import time
import logging
from pathlib import Path
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from .routers import (
    home,
    newsletter,
    events,
    site_content,
    conference,
    background,
    debug,
)
from .config import get_settings, clear_settings_cache

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Load environment variables from .env (local development only)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
loaded = load_dotenv(dotenv_path=env_path)
if loaded:
    logger.info(f"Environment loaded from: {env_path}")
else:
    logger.warning(f"No .env file loaded from: {env_path}")

clear_settings_cache()

app_settings = get_settings()
logger.info(f"🔧 Environment: {app_settings.environment}, record store auth: {app_settings.airtable_auth_method}")

app = FastAPI(title="WNY AI Web Backend", version="0.1.0", redirect_slashes=False)

LOCAL_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]


def build_allowed_origins(settings) -> list:
    """Local frontends plus the comma separated CORS_ORIGIN list; "*" in production when it is unset."""
    configured = [o.strip() for o in settings.cors_origin.split(",") if o.strip()]
    extra = [o for o in configured if o not in LOCAL_ORIGINS]
    if settings.environment == "production" and not extra:
        logger.warning("⚠️ CORS_ORIGIN not set in production, allowing all origins")
        return ["*"]
    return LOCAL_ORIGINS + extra


allowed_origins = build_allowed_origins(app_settings)
logger.info(f"🌐 Allowed CORS origins: {allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

if not app_settings.debug_routes_enabled:
    logger.info("Debug routes disabled (set DEBUG_ROUTES=true to enable)")

# Include routers
app.include_router(home.router, prefix="/api")
app.include_router(newsletter.router, prefix="/api")
app.include_router(events.router, prefix="/api")
app.include_router(site_content.router, prefix="/api")
app.include_router(conference.router, prefix="/api")
app.include_router(background.router, prefix="/api")
app.include_router(debug.router, prefix="/api")


@app.get("/", tags=["root"])  # Simple welcome endpoint
async def root():
    return {"message": "Welcome to the WNY AI backend"}


@app.get("/api/health", tags=["health"])
async def health():
    return {"status": "ok", "server": "alive"}


@app.get("/api/ping", tags=["health"])
async def ping():
    logger.info(f"🏓 Ping at {time.time()}")
    return {"pong": True, "time": time.time()}


@app.get("/favicon.ico", tags=["static"])
async def favicon():
    """Handle favicon.ico requests - return 204 No Content"""
    return Response(status_code=204)
