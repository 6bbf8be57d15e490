"""StoryblokSource: fetches component schemas from the Storyblok management API.

Performs a single ``GET {base_url}/spaces/{space_id}/components`` request and
returns the ``components`` array of the response as ``Component`` objects.

The management token is read exclusively from the
``STORYBLOK_MANAGEMENT_TOKEN`` environment variable.  It is never accepted as
a constructor parameter and never appears in ``repr()``, ``str()``, or log
output.

No retry or backoff is performed: a transport error, a non-2xx status or a
malformed payload raises ``SchemaFetchError`` and the caller decides whether
to re-run the analysis.

Example::

    from storyblok_analyzer.sources.storyblok import StoryblokSource

    source = StoryblokSource()
    components = source.fetch_components("123456")
    print(len(components))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

import httpx

from storyblok_analyzer.errors import ConfigurationError, SchemaFetchError
from storyblok_analyzer.models import Component

__all__ = ["DEFAULT_BASE_URL", "TOKEN_ENV_VAR", "StoryblokSource"]

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api-us.storyblok.com/v1"
TOKEN_ENV_VAR = "STORYBLOK_MANAGEMENT_TOKEN"


class StoryblokSource:
    """Schema source for one Storyblok region endpoint.

    Args:
        base_url: Management API root.  Defaults to the US region
            (``https://api-us.storyblok.com/v1``).
        timeout: Request timeout in seconds.
        client: Optional pre-configured ``httpx.Client``.  When omitted a
            client is created per request and closed afterwards.

    Raises:
        ConfigurationError: If ``STORYBLOK_MANAGEMENT_TOKEN`` is unset or empty.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        token = os.environ.get(TOKEN_ENV_VAR)
        if not token:
            msg = f"{TOKEN_ENV_VAR} is not set"
            raise ConfigurationError(msg)
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    def __repr__(self) -> str:
        """Return a safe repr that never exposes the management token."""
        return f"StoryblokSource(base_url={self._base_url!r})"

    def components_url(self, space_id: str) -> str:
        return f"{self._base_url}/spaces/{space_id}/components"

    def fetch_components(self, space_id: str) -> list[Component]:
        """Fetch every component definition of ``space_id``.

        Raises:
            SchemaFetchError: On transport errors, non-2xx responses, a body
                that is not JSON, or a body without a ``components`` list.
        """
        url = self.components_url(space_id)
        headers = {
            "Authorization": self._token,
            "Content-Type": "application/json",
        }
        logger.debug("GET %s", url)
        try:
            if self._client is not None:
                response = self._client.get(url, headers=headers, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            msg = (
                f"Request failed with status code {exc.response.status_code} "
                f"for space {space_id}"
            )
            raise SchemaFetchError(msg) from exc
        except httpx.HTTPError as exc:
            msg = f"Request for space {space_id} failed: {exc}"
            raise SchemaFetchError(msg) from exc
        except ValueError as exc:
            msg = f"Response for space {space_id} is not valid JSON"
            raise SchemaFetchError(msg) from exc

        raw_components = payload.get("components") if isinstance(payload, Mapping) else None
        if not isinstance(raw_components, list):
            msg = f"Response for space {space_id} has no components list"
            raise SchemaFetchError(msg)

        logger.debug("Received %d components for space %s", len(raw_components), space_id)
        return [Component.from_mapping(raw) for raw in raw_components]
