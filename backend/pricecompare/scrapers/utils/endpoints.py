"""Ordered endpoint probing for upstreams without one stable route.

Candidates are tried one at a time, each exactly once, and probing stops at
the first 2xx response. Nothing is retried.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import httpx
import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EndpointCandidate:
    """One concrete request shape for a logical upstream call."""

    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)


async def probe_endpoints(
    client: httpx.AsyncClient,
    candidates: Sequence[EndpointCandidate],
    timeout: float,
    adapter: str = "",
) -> Optional[httpx.Response]:
    """Return the first successful response among ``candidates``.

    Args:
        client: HTTP client used for every attempt
        candidates: Request shapes in priority order
        timeout: Per-request timeout in seconds
        adapter: Adapter slug for log context

    Returns:
        The first 2xx response, or None when every candidate failed
    """
    last_error = ""
    for candidate in candidates:
        try:
            response = await client.get(
                candidate.url,
                params=candidate.params or None,
                headers=candidate.headers or None,
                timeout=timeout,
            )
        except httpx.HTTPError as e:
            last_error = f"{type(e).__name__}: {e}"
            logger.info(
                "endpoint_candidate_error",
                adapter=adapter,
                url=candidate.url,
                error=last_error,
            )
            continue

        if response.is_success:
            logger.info("endpoint_candidate_succeeded", adapter=adapter, url=candidate.url)
            return response

        last_error = f"HTTP {response.status_code}"
        logger.info(
            "endpoint_candidate_failed",
            adapter=adapter,
            url=candidate.url,
            status_code=response.status_code,
        )

    logger.warning(
        "all_endpoint_candidates_failed",
        adapter=adapter,
        attempts=len(candidates),
        last_error=last_error,
    )
    return None
