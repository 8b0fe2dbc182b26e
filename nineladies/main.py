"""Entry point: wires Settings → PromptConfig → Backend → BatchDriver."""
from typing import Optional
import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler

from nineladies.backends.client import Backend
from nineladies.backends.ollama import OllamaChatBackend
from nineladies.backends.openai import OpenAICompatibleBackend
from nineladies.batch import BatchDriver
from nineladies.config import Settings
from nineladies.constants import (
    BACKEND_OLLAMA,
    BACKEND_OPENAI,
    DEFAULT_LOG_LEVEL,
    EXIT_FAILURE,
    MSG_CONFIG_ERROR,
    MSG_URL_REQUIRED,
)
from nineladies.errors import ConfigError
from nineladies.prompt_config import PromptConfig

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[Backend]] = {
    BACKEND_OPENAI: OpenAICompatibleBackend,
    BACKEND_OLLAMA: OllamaChatBackend,
}

app = typer.Typer(
    add_completion=False,
    help="Batch image description via a VLM server. Reads image paths from stdin, writes JSON lines.",
)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False))


def build_backend(kind: str, base_url: str, timeout: float) -> Backend:
    return BACKENDS[kind](base_url, timeout=timeout)


def _resolve_settings(
    url: Optional[str],
    backend: Optional[str],
    model: Optional[str],
    timeout: Optional[float],
    log_level: Optional[str],
) -> Settings:
    """Command-line flags override environment settings."""
    return Settings.from_env(
        base_url=url,
        backend=backend,
        model=model,
        timeout=timeout,
        log_level=log_level,
    )


@app.command()
def describe(
    prompt: str = typer.Option(..., "--prompt", help="Path to the prompt configuration JSON file"),
    url: Optional[str] = typer.Option(None, "--url", help="Server base URL, e.g. http://localhost:8080"),
    backend: Optional[str] = typer.Option(None, "--backend", help="Wire protocol: openai or ollama"),
    model: Optional[str] = typer.Option(None, "--model", help="Model name; overrides the prompt file"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds, 0 for none"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Validate inputs without calling the model"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    try:
        settings = _resolve_settings(url, backend, model, timeout, log_level)
    except ConfigError as exc:
        _setup_logging(log_level or DEFAULT_LOG_LEVEL)
        logger.error(MSG_CONFIG_ERROR, exc)
        raise typer.Exit(code=EXIT_FAILURE)

    _setup_logging(settings.log_level)

    try:
        prompt_config = PromptConfig.load(prompt)
        match (dry_run, settings.base_url):
            case (True, _):
                client = None
            case (False, None):
                raise ConfigError(MSG_URL_REQUIRED)
            case (False, base_url):
                client = build_backend(settings.backend, base_url, settings.timeout)
        driver = BatchDriver(prompt_config, client, dry_run=dry_run, model=settings.model)
    except ConfigError as exc:
        logger.error(MSG_CONFIG_ERROR, exc)
        raise typer.Exit(code=EXIT_FAILURE)

    outcome = driver.run(sys.stdin, sys.stdout)
    raise typer.Exit(code=outcome.exit_code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
