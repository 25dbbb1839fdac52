#!/usr/bin/env python3
"""
Dev helper: send a test contact-form submission to the local dev server.

Builds the JSON body the portfolio frontend sends and POST-s it to
/api/contact, or prints an equivalent Lambda Function URL event that can be
pasted into the Lambda console's test tab.

Usage
-----
# Basic — valid submission to localhost:8000
python scripts/send_contact.py

# Custom fields
python scripts/send_contact.py --name Alice --email a@example.com --message "hi"

# Leave a required field out to exercise the validation path
python scripts/send_contact.py --omit email

# Send a CORS preflight instead of a POST
python scripts/send_contact.py --preflight

# Print the request body without sending it
python scripts/send_contact.py --dry-run

# Print a Lambda test event instead of sending
python scripts/send_contact.py --lambda-event

Environment / .env
------------------
CONTACT_DEV_URL   Base URL of the dev server (default: http://localhost:8000).
                  Overridden by --url.
"""

import argparse
import json
import os
import sys
import textwrap
from pathlib import Path

import httpx
from dotenv import load_dotenv


REQUIRED_FIELDS = ("name", "email", "message")
DEFAULT_ORIGIN = "http://localhost:3000"


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def _build_body(name: str, email: str, message: str, omit: list[str]) -> dict:
    body = {"name": name, "email": email, "message": message}
    for field in omit:
        body.pop(field, None)
    return body


def _build_lambda_event(body: dict, method: str, origin: str) -> dict:
    """
    Build a Lambda Function URL event (payload v2.0) carrying body.

    Only the fields the handler reads are filled in; the Lambda console
    accepts partial events.
    """
    return {
        "version": "2.0",
        "rawPath": "/",
        "headers": {
            "content-type": "application/json",
            "origin": origin,
        },
        "requestContext": {
            "http": {
                "method": method,
                "path": "/",
            },
        },
        "body": json.dumps(body) if method != "OPTIONS" else None,
        "isBase64Encoded": False,
    }


# ---------------------------------------------------------------------------
# Pretty printer
# ---------------------------------------------------------------------------

def _print_response(response: httpx.Response) -> None:
    status = response.status_code
    symbol = "OK" if status == 200 else "FAIL"
    print(f"\n[{symbol}] HTTP {status}")
    for key, value in response.headers.items():
        if key.lower().startswith("access-control-"):
            print(f"{key}: {value}")
    try:
        print(json.dumps(response.json(), indent=2))
    except json.JSONDecodeError:
        print(response.text)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    # Locate project root (scripts/ lives one level below the root)
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    load_dotenv(project_root / "backend" / ".env")

    parser = argparse.ArgumentParser(
        prog="send_contact.py",
        description="Send a test contact-form submission to the Contact Relay dev server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              python scripts/send_contact.py
              python scripts/send_contact.py --omit message
              python scripts/send_contact.py --preflight
              python scripts/send_contact.py --lambda-event > event.json
        """),
    )
    parser.add_argument(
        "--url",
        default=os.getenv("CONTACT_DEV_URL", "http://localhost:8000"),
        help="Dev server base URL (default: http://localhost:8000)",
    )
    parser.add_argument("--name", default="Alice", help='Sender name (default: "Alice")')
    parser.add_argument(
        "--email",
        default="a@example.com",
        help="Sender email address (default: a@example.com)",
    )
    parser.add_argument("--message", default="hi", help='Message text (default: "hi")')
    parser.add_argument(
        "--omit",
        action="append",
        default=[],
        choices=REQUIRED_FIELDS,
        metavar="FIELD",
        help="Leave FIELD out of the body (repeatable). One of: name, email, message.",
    )
    parser.add_argument(
        "--origin",
        default=DEFAULT_ORIGIN,
        help=f"Origin header to send (default: {DEFAULT_ORIGIN})",
    )
    parser.add_argument(
        "--preflight",
        action="store_true",
        help="Send an OPTIONS preflight request instead of a POST.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the request body without sending it.",
    )
    mode.add_argument(
        "--lambda-event",
        action="store_true",
        help="Print a Lambda Function URL test event instead of sending.",
    )

    args = parser.parse_args()

    body = _build_body(args.name, args.email, args.message, args.omit)
    method = "OPTIONS" if args.preflight else "POST"

    if args.lambda_event:
        print(json.dumps(_build_lambda_event(body, method, args.origin), indent=2))
        return 0

    endpoint = f"{args.url.rstrip('/')}/api/contact"

    print(f"Endpoint : {endpoint}")
    print(f"Method   : {method}")
    print(f"Origin   : {args.origin}")

    if args.dry_run:
        print("\n[DRY RUN] Body:")
        print(json.dumps(body, indent=2))
        return 0

    headers = {"Origin": args.origin}
    try:
        if args.preflight:
            response = httpx.options(
                endpoint,
                headers={**headers, "Access-Control-Request-Method": "POST"},
                timeout=30,
            )
        else:
            response = httpx.post(endpoint, json=body, headers=headers, timeout=30)
    except httpx.ConnectError:
        print(
            f"\nERROR: Could not connect to {endpoint}\n"
            "Is the dev server running? Start it with:\n"
            "  cd backend && uvicorn contact_relay.main:app --reload",
            file=sys.stderr,
        )
        return 1
    except httpx.HTTPError as exc:
        print(f"\nERROR: {exc}", file=sys.stderr)
        return 1

    _print_response(response)
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
