from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import json

from nineladies.constants import (
    MSG_PROMPT_FIELD_TYPE,
    MSG_PROMPT_INVALID,
    MSG_PROMPT_MISSING_FIELD,
    MSG_PROMPT_NOT_OBJECT,
    MSG_PROMPT_UNREADABLE,
    MSG_TEMPERATURE_RANGE,
    PROMPT_REQUIRED_TEXT_FIELDS,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
)
from nineladies.errors import PromptParseError, PromptReadError, TemperatureRangeError


@dataclass(frozen=True)
class PromptConfig:
    system: str
    prompt: str
    temperature: float
    model: Optional[str] = None

    @classmethod
    def load(cls, path: str | Path) -> "PromptConfig":
        """Read and validate a prompt file. Raises a ConfigError subclass on any problem."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PromptReadError(MSG_PROMPT_UNREADABLE % (path, exc)) from exc

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PromptParseError(MSG_PROMPT_INVALID % (path, exc)) from exc

        return cls._validate(path, raw)

    @staticmethod
    def _validate(path: str | Path, raw: Any) -> "PromptConfig":
        def invalid(reason: str) -> PromptParseError:
            return PromptParseError(MSG_PROMPT_INVALID % (path, reason))

        match raw:
            case dict():
                pass
            case _:
                raise invalid(MSG_PROMPT_NOT_OBJECT)

        for name in PROMPT_REQUIRED_TEXT_FIELDS:
            match raw.get(name):
                case None:
                    raise invalid(MSG_PROMPT_MISSING_FIELD % name)
                case str():
                    pass
                case _:
                    raise invalid(MSG_PROMPT_FIELD_TYPE % (name, "string"))

        match raw.get("temperature"):
            case None:
                raise invalid(MSG_PROMPT_MISSING_FIELD % "temperature")
            case bool():
                raise invalid(MSG_PROMPT_FIELD_TYPE % ("temperature", "number"))
            case int() | float() as t:
                temperature = float(t)
            case _:
                raise invalid(MSG_PROMPT_FIELD_TYPE % ("temperature", "number"))

        match raw.get("model"):
            case None | str():
                model = raw.get("model")
            case _:
                raise invalid(MSG_PROMPT_FIELD_TYPE % ("model", "string"))

        if not TEMPERATURE_MIN <= temperature <= TEMPERATURE_MAX:
            raise TemperatureRangeError(MSG_TEMPERATURE_RANGE % temperature)

        return PromptConfig(
            system=raw["system"],
            prompt=raw["prompt"],
            temperature=temperature,
            model=model,
        )
