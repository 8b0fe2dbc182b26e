"""OpenAICompatibleBackend: llama.cpp-style /v1/chat/completions."""
from typing import Any, Optional

from nineladies.backends.client import Backend, encode_image
from nineladies.constants import BACKEND_OPENAI, MSG_BAD_ENVELOPE, OPENAI_CHAT_ENDPOINT
from nineladies.errors import EnvelopeError
from nineladies.image_validator import ValidatedImage
from nineladies.prompt_config import PromptConfig


class OpenAICompatibleBackend(Backend):
    name = BACKEND_OPENAI
    endpoint = OPENAI_CHAT_ENDPOINT

    def build_request(
        self, prompt: PromptConfig, image: ValidatedImage, model: Optional[str] = None
    ) -> dict[str, Any]:
        # The server runs a single model; no model name goes on the wire.
        data_url = f"data:{image.format.mime_type};base64,{encode_image(image)}"
        return {
            "messages": [
                {
                    "role": "system",
                    "content": [{"type": "text", "text": prompt.system}],
                },
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": data_url}},
                        {"type": "text", "text": prompt.prompt},
                    ],
                },
            ],
            "temperature": prompt.temperature,
        }

    def parse_response(self, body: Any) -> str:
        match body:
            case {"choices": []}:
                return ""
            case {"choices": [{"message": {"content": str() as content}}, *_]}:
                return content
            case _:
                raise EnvelopeError(MSG_BAD_ENVELOPE % "expected choices[0].message.content")
