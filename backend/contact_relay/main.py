"""
Contact Relay dev server.
FastAPI application that serves the contact handler locally.

Run with:
  cd backend && uvicorn contact_relay.main:app --reload
"""

import logging
import os

from fastapi import FastAPI

from contact_relay.routers import contact

# Configure logging to output to console
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Contact Relay",
    description="Forwards portfolio contact-form submissions to Resend",
    version="0.1.0",
)

# No CORSMiddleware: the handler shapes its own CORS headers and must see
# OPTIONS requests itself, exactly as it does behind a Function URL.
app.include_router(contact.router, prefix="/api/contact", tags=["contact"])


@app.on_event("startup")
async def log_startup_url() -> None:
    """
    Log the URL the dev server is reachable at.

    The port is taken from HOST_PORT so Docker-mapped ports are reported
    correctly. Defaults to 8000.
    """
    host_port = os.getenv("HOST_PORT", "8000")
    logger.info("Contact Relay running at: http://localhost:%s/api/contact", host_port)


@app.get("/")
async def root():
    return {"message": "Contact Relay", "version": "0.1.0"}


@app.get("/health")
async def health():
    return {"status": "ok"}
