"""Remote scorer: forwards requests to a real scoring model over HTTP.

The remote endpoint receives the ScoreRequest JSON body and must answer
with a ScoreResponse-shaped JSON body.
"""

import logging

import httpx

from config import settings
from models.requests import ScoreRequest
from models.responses import ScoreResponse
from services.scorers.base import BaseScorer
from services.scorers.errors import ScorerValidationError, TransportError

logger = logging.getLogger(__name__)


class RemoteScorer(BaseScorer):
    name = "remote"

    def __init__(
        self,
        url: str | None = None,
        timeout_s: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url if url is not None else settings.remote_scorer_url
        self.timeout_s = timeout_s if timeout_s is not None else settings.remote_timeout_s
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_s, connect=5.0),
                follow_redirects=True,
            )
        return self._client

    async def score(self, request: ScoreRequest) -> ScoreResponse:
        if not self.url:
            raise TransportError("No remote scorer URL configured (REMOTE_SCORER_URL)")

        client = self._get_client()
        try:
            response = await client.post(self.url, json=request.model_dump(mode="json"))
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error("Remote scorer timed out: %s", e)
            raise TransportError(f"Remote scorer timed out after {self.timeout_s}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Remote scorer returned HTTP %d", status)
            raise TransportError(f"Remote scorer returned HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.error("Remote scorer request failed: %s", e)
            raise TransportError(f"Remote scorer unreachable: {e}") from e

        try:
            result = ScoreResponse.model_validate(response.json())
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError and pydantic ValidationError
            logger.error("Remote scorer sent an invalid body: %s", e)
            raise ScorerValidationError(f"Invalid response from remote scorer: {e}") from e

        return result.model_copy(update={"scorer": self.name})

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
