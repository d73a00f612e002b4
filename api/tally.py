"""Vercel serverless function for tallying voting sessions."""

import json
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import ballotbox modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from ballotbox.session import SessionError, VotingSession, calculate_results
from ballotbox.voting import InvalidBallotError

FETCH_TIMEOUT = 30.0


class FetchError(Exception):
    """Error fetching a session document from a URL."""
    pass


def handler(request):
    """Handle incoming requests to tally a voting session.

    Accepts:
    - POST with JSON body holding a session document
      (see VotingSession.from_dict for its shape)
    - POST with JSON body {"url": "https://..."} pointing at such a document

    Returns JSON with the session's parties, systems and results.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        data = json.loads(request.body.decode("utf-8"))
        if not isinstance(data, dict):
            return create_response(
                {"error": "Request body must be a JSON object"},
                status=400,
            )

        if "url" in data:
            data = fetch_session_document(data["url"])

        session = calculate_results(VotingSession.from_dict(data))
        body = session.to_dict()

        return create_response({
            "session_id": body["id"],
            "parties": body["parties"],
            "systems": body["systems"],
            "results": body["results"],
        })

    except (SessionError, InvalidBallotError, FetchError) as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def fetch_session_document(url: str) -> dict:
    """Fetch a session document from a URL."""
    # Validate URL
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=FETCH_TIMEOUT) as client:
            response = client.get(url)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"HTTP error fetching URL: {e.response.status_code}")
    except httpx.RequestError as e:
        raise FetchError(f"Error fetching URL: {e}")
    except ValueError as e:
        raise FetchError(f"URL did not return JSON: {e}")

    if not isinstance(data, dict):
        raise FetchError("URL did not return a session document")
    return data


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
