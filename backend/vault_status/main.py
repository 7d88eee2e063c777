"""
Creator Vault Status — FastAPI Main Application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vault_status.api.router import api_router
from vault_status.chain.transport import make_web3
from vault_status.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared web3 connection for the app lifetime and close it on shutdown."""
    logger.info("%s v%s starting...", settings.app_name, settings.version)
    logger.info("Chain %s · read RPC %s", settings.chain_id, settings.effective_read_rpc_url)
    if not settings.creation_code_path:
        logger.warning("CREATION_CODE_PATH not set; deterministic address checks will be skipped")
    app.state.w3 = make_web3(settings.effective_read_rpc_url, timeout=settings.rpc_timeout_seconds)
    yield
    logger.info("Shutting down...")
    await app.state.w3.provider.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Deployment verification and wiring audit for creator vaults",
    version=settings.version,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_allow_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": settings.version, "chainId": settings.chain_id}


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "health": "/health",
    }
