"""
Contact router for the local dev server.

Wraps the Lambda handler so the portfolio frontend can be pointed at
http://localhost:8000/api/contact during development. Each request is
translated into a Function URL style event and the handler's response is
returned unchanged (status, CORS headers, JSON body).

Endpoints:
  POST    /   — submit the contact form
  OPTIONS /   — CORS preflight
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from contact_relay.handler import ContactHandler, get_default_handler

logger = logging.getLogger(__name__)

router = APIRouter()


def get_contact_handler() -> ContactHandler:
    """Dependency returning the shared handler; overridden in tests."""
    return get_default_handler()


async def request_to_event(request: Request) -> dict:
    """
    Build a Lambda HTTP event (payload v2.0) from a FastAPI request.

    The body is passed through as text, the same way a Function URL delivers
    a JSON request.
    """
    raw = await request.body()
    return {
        "version": "2.0",
        "rawPath": request.url.path,
        "headers": dict(request.headers),
        "requestContext": {
            "http": {
                "method": request.method,
                "path": request.url.path,
                "sourceIp": request.client.host if request.client else None,
            },
        },
        "body": raw.decode("utf-8", errors="replace"),
        "isBase64Encoded": False,
    }


def event_response_to_http(result: dict) -> Response:
    return Response(
        content=result["body"],
        status_code=result["statusCode"],
        headers=result["headers"],
        media_type="application/json",
    )


@router.api_route("", methods=["POST", "OPTIONS"])
@router.api_route("/", methods=["POST", "OPTIONS"], include_in_schema=False)
async def submit_contact(
    request: Request,
    handler: ContactHandler = Depends(get_contact_handler),
) -> Response:
    event = await request_to_event(request)
    # boto3 and the resend SDK block
    result = await run_in_threadpool(handler, event)
    logger.info("Contact %s -> HTTP %s", request.method, result["statusCode"])
    return event_response_to_http(result)
