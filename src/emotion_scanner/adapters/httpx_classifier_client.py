"""HTTP client for the remote emotion classifier."""

from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from emotion_scanner.domain.capture import FramePayload
from emotion_scanner.domain.classification import ClassificationResult
from emotion_scanner.domain.errors import ClassificationError
from emotion_scanner.services.classification import ClassifierClient

ANALYZE_PATH = "/api/analyze-emotion"


@dataclass
class HttpxClassifierClient(ClassifierClient):
    """Classifier client using httpx.

    Requests omit ``wallet_address`` unless one is configured, which tells
    the service to run in collection mode.
    """

    base_url: str
    http_client: httpx.AsyncClient
    wallet_address: str | None = None
    timeout: float | None = 10.0

    @classmethod
    def create(
        cls,
        base_url: str,
        wallet_address: str | None = None,
        timeout: float | None = 10.0,
    ) -> "HttpxClassifierClient":
        """Create a classifier client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            wallet_address=wallet_address,
            timeout=timeout,
        )

    async def classify(self, payload: FramePayload) -> ClassificationResult:
        """Send one frame and return the classifier's verdict."""
        body: dict[str, object] = {"image": payload.data_url}
        if self.wallet_address:
            body["wallet_address"] = self.wallet_address
        url = f"{self.base_url.rstrip('/')}{ANALYZE_PATH}"
        try:
            response = await self.http_client.post(url, json=body, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise ClassificationError(f"Classifier request failed: {exc}") from exc
        except ValueError as exc:
            raise ClassificationError("Classifier returned invalid JSON") from exc
        try:
            return ClassificationResult.model_validate(data)
        except ValidationError as exc:
            raise ClassificationError("Classifier returned an unexpected body") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
