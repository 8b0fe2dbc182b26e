"""OllamaChatBackend: Ollama-style native /api/chat."""
from typing import Any, Optional

from nineladies.backends.client import Backend, encode_image
from nineladies.constants import (
    BACKEND_OLLAMA,
    MSG_BAD_ENVELOPE,
    MSG_MODEL_REQUIRED,
    OLLAMA_CHAT_ENDPOINT,
)
from nineladies.errors import EnvelopeError, MissingModelError
from nineladies.image_validator import ValidatedImage
from nineladies.prompt_config import PromptConfig


class OllamaChatBackend(Backend):
    name = BACKEND_OLLAMA
    endpoint = OLLAMA_CHAT_ENDPOINT
    requires_model = True

    def build_request(
        self, prompt: PromptConfig, image: ValidatedImage, model: Optional[str] = None
    ) -> dict[str, Any]:
        resolved = model or prompt.model
        if not resolved:
            raise MissingModelError(MSG_MODEL_REQUIRED)
        return {
            "model": resolved,
            "messages": [
                {"role": "system", "content": prompt.system},
                {
                    "role": "user",
                    "content": prompt.prompt,
                    "images": [encode_image(image)],
                },
            ],
            "stream": False,
            "options": {"temperature": prompt.temperature},
        }

    def parse_response(self, body: Any) -> str:
        match body:
            case {"message": {"content": str() as content}}:
                return content
            case _:
                raise EnvelopeError(MSG_BAD_ENVELOPE % "expected message.content")
