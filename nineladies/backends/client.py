"""Backend: abstract base for VLM inference server protocols."""
from abc import ABC, abstractmethod
from typing import Any, Optional
import base64
import json

import requests

from nineladies.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    MSG_BAD_ENVELOPE,
    MSG_REQUEST_FAILED,
    MSG_SERVER_STATUS,
)
from nineladies.errors import EnvelopeError, HTTPStatusError, TransportError
from nineladies.image_validator import ValidatedImage
from nineladies.prompt_config import PromptConfig


ResponseValue = Any


def _reject_constant(name: str) -> Any:
    raise ValueError(name)


def normalize_content(text: str) -> ResponseValue:
    """Parsed JSON when the reply is valid JSON, otherwise the text unchanged."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return text


def encode_image(image: ValidatedImage) -> str:
    return base64.standard_b64encode(image.data).decode()


class Backend(ABC):
    """One wire protocol. Subclasses build the request body and read the reply envelope."""

    name: str
    endpoint: str
    requires_model: bool = False

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout or None
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._base_url + self.endpoint

    @abstractmethod
    def build_request(
        self, prompt: PromptConfig, image: ValidatedImage, model: Optional[str] = None
    ) -> dict[str, Any]:
        ...

    @abstractmethod
    def parse_response(self, body: Any) -> str:
        """Reduce the decoded reply envelope to the model's text. Raises EnvelopeError."""
        ...

    def call(
        self, prompt: PromptConfig, image: ValidatedImage, model: Optional[str] = None
    ) -> ResponseValue:
        """Send one image and return the normalized reply. Raises BackendCallError on failure."""
        payload = self.build_request(prompt, image, model)
        try:
            response = self._session.post(self.url, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(MSG_REQUEST_FAILED % exc) from exc

        if not (200 <= response.status_code < 300):
            status = f"{response.status_code} {response.reason or ''}".strip()
            raise HTTPStatusError(
                response.status_code,
                response.text,
                MSG_SERVER_STATUS % (status, response.text),
            )

        try:
            body = response.json()
        except (ValueError, RecursionError) as exc:
            raise EnvelopeError(MSG_BAD_ENVELOPE % exc) from exc

        return normalize_content(self.parse_response(body))
