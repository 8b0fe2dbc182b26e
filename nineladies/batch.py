"""BatchDriver: validate → call → emit, one path at a time."""
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional, TextIO
import json
import logging
import sys

from nineladies.backends.client import Backend
from nineladies.constants import (
    EXIT_FAILURE,
    EXIT_OK,
    MSG_BACKEND_REQUIRED,
    MSG_CALLING,
    MSG_DRY_RUN_OK,
    MSG_ITEM_FAILED,
    MSG_MODEL_REQUIRED,
    MSG_RUN_SUMMARY,
)
from nineladies.errors import BackendCallError, ImageValidationError, MissingModelError
from nineladies.image_validator import validate
from nineladies.prompt_config import PromptConfig

logger = logging.getLogger(__name__)


# ── pure helpers (module-level so tests can import them directly) ──────────────


def iter_paths(lines: Iterable[str]) -> Iterator[str]:
    """Yield trimmed, non-blank lines lazily."""
    return (p for p in (line.strip() for line in lines) if p)


def resolve_model(override: Optional[str], prompt: PromptConfig) -> Optional[str]:
    """Command-line model wins over the prompt file's model."""
    return override or prompt.model or None


def format_record(path: str, response: object) -> str:
    return json.dumps({"file": path, "response": response}, ensure_ascii=False, separators=(",", ":"))


# ── outcome ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ItemFailure:
    path: str
    error: Exception


@dataclass
class RunOutcome:
    processed: int = 0
    emitted: int = 0
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def had_errors(self) -> bool:
        return bool(self.failures)

    @property
    def exit_code(self) -> int:
        # Any failed item fails the run, dry-run or not.
        return EXIT_FAILURE if self.had_errors else EXIT_OK


# ── driver ────────────────────────────────────────────────────────────────────


class BatchDriver:
    """Drives every input path through validation and, unless dry-running, the backend."""

    def __init__(
        self,
        prompt: PromptConfig,
        backend: Optional[Backend],
        *,
        dry_run: bool = False,
        model: Optional[str] = None,
    ) -> None:
        self._prompt = prompt
        self._backend = backend
        self._dry_run = dry_run
        self._model = resolve_model(model, prompt)

        # Fail before any path is read, never mid-batch.
        match (dry_run, backend):
            case (True, _):
                pass
            case (False, None):
                raise ValueError(MSG_BACKEND_REQUIRED)
            case (False, b) if b.requires_model and not self._model:
                raise MissingModelError(MSG_MODEL_REQUIRED)
            case _:
                pass

    def run(self, lines: Iterable[str], out: Optional[TextIO] = None) -> RunOutcome:
        out = sys.stdout if out is None else out
        outcome = RunOutcome()
        for path in iter_paths(lines):
            outcome.processed += 1
            self._process(path, out, outcome)
        logger.info(MSG_RUN_SUMMARY, outcome.processed, outcome.emitted, len(outcome.failures))
        return outcome

    def _process(self, path: str, out: TextIO, outcome: RunOutcome) -> None:
        try:
            image = validate(path)
        except ImageValidationError as exc:
            logger.error("%s", exc)
            outcome.failures.append(ItemFailure(path, exc))
            return

        if self._dry_run:
            logger.info(MSG_DRY_RUN_OK, path, image.format.value, len(image.data))
            return

        logger.debug(MSG_CALLING, self._backend.name, path)
        try:
            response = self._backend.call(self._prompt, image, self._model)
        except BackendCallError as exc:
            logger.error(MSG_ITEM_FAILED, path, exc)
            outcome.failures.append(ItemFailure(path, exc))
            return

        out.write(format_record(path, response) + "\n")
        out.flush()
        outcome.emitted += 1


def run(
    prompt: PromptConfig,
    lines: Iterable[str],
    backend: Optional[Backend],
    *,
    dry_run: bool = False,
    model: Optional[str] = None,
    out: Optional[TextIO] = None,
) -> RunOutcome:
    return BatchDriver(prompt, backend, dry_run=dry_run, model=model).run(lines, out)
