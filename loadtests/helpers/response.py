"""Response error extraction for load test observability.

Turns Marketplace API error bodies into one-line messages:

- Schema validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Domain errors: {"error": "msg"}
- Aggregate validation (422): {"error": {"field": ["msg", ...]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

# Rejections a purchasing workload expects to see under contention.
EXPECTED_REJECTIONS = {402, 409, 503}


def extract_error_detail(response: Response) -> str:
    """Compact error message for Locust failure messages and log lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body.get("detail"), list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(
                f"{field}: {'; '.join(messages) if isinstance(messages, list) else messages}"
                for field, messages in error.items()
            )
        detail = str(error)
        retry_after = response.headers.get("Retry-After")
        return f"{detail} (retry after {retry_after}s)" if retry_after else detail

    return str(body)[:300]


def is_expected_rejection(response: Response) -> bool:
    return response.status_code in EXPECTED_REJECTIONS
