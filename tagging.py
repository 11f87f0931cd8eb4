"""Client for the external AI skill-tagging service."""

from typing import List, Optional

import httpx
import structlog

from errors import ExternalServiceUnavailable

logger = structlog.get_logger()

SERVICE_NAME = "ai-tagging"


class TaggingClient:
    """Calls ``POST {base_url}/api/tag-skill`` and returns the tag list.

    The service is opaque: any failure (no URL configured, transport error,
    timeout, non-2xx, malformed body) surfaces as ExternalServiceUnavailable
    so the caller can skip the enhancement.
    """

    def __init__(
        self,
        base_url: Optional[str],
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") if base_url else None
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._base_url is not None

    def tag_skill(self, title: str, description: str, category: str) -> List[str]:
        if not self.enabled:
            raise ExternalServiceUnavailable(SERVICE_NAME, "no service URL configured")

        payload = {"title": title, "description": description, "category": category}
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(f"{self._base_url}/api/tag-skill", json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise ExternalServiceUnavailable(SERVICE_NAME, str(e)) from e
        except ValueError as e:
            raise ExternalServiceUnavailable(SERVICE_NAME, "response is not JSON") from e

        tags = data.get("tags") if isinstance(data, dict) else data
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ExternalServiceUnavailable(SERVICE_NAME, "unexpected response shape")
        logger.debug("skill tagged", title=title, tag_count=len(tags))
        return tags
