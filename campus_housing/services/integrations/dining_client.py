"""
Dining service client.

Proxies today's menus from the dining service. Configured base URLs
are tried in order; the first one that answers wins and its status,
body and caching headers are passed through unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests

from campus_housing.config.settings import settings
from campus_housing.services.common import ExternalServiceError

logger = logging.getLogger(__name__)

MENUS_TODAY_PATH = "/api/dining/menus/today"
PASSTHROUGH_HEADERS = ("Content-Type", "Cache-Control")


@dataclass
class UpstreamResponse:
    """Raw upstream answer to be relayed to the caller."""

    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)


class DiningClient:
    """
    Thin HTTP client for the dining service.

    Usage:
        >>> client = DiningClient()
        >>> upstream = client.get_today_menus(student_id="...")
    """

    def __init__(
        self,
        base_urls: Optional[List[str]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_urls = base_urls or settings.dining_base_urls()
        self.timeout = settings.DINING_TIMEOUT_SECONDS if timeout is None else timeout
        self.session = session or requests.Session()

    def get_today_menus(self, student_id: Optional[str] = None) -> UpstreamResponse:
        """
        Fetch today's menus.

        Args:
            student_id: Forwarded as ``X-Student-ID`` when given

        Raises:
            ExternalServiceError: No base URL answered
        """
        headers = {"Accept": "application/json"}
        if student_id:
            headers["X-Student-ID"] = student_id

        last_error: Optional[Exception] = None
        for base_url in self.base_urls:
            url = f"{base_url.rstrip('/')}{MENUS_TODAY_PATH}"
            try:
                response = self.session.get(url, headers=headers, timeout=self.timeout)
            except requests.RequestException as exc:
                logger.warning(f"Dining service not reachable at {base_url}: {exc}")
                last_error = exc
                continue

            logger.debug(f"Dining service answered {response.status_code} from {base_url}")
            return UpstreamResponse(
                status_code=response.status_code,
                content=response.content,
                headers={
                    name: response.headers[name]
                    for name in PASSTHROUGH_HEADERS
                    if name in response.headers
                },
            )

        logger.error("Dining service unavailable", extra={"candidates": self.base_urls})
        raise ExternalServiceError(
            "Dining service unavailable",
            {"error": str(last_error) if last_error else None},
        )
