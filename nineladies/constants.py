"""All magic values live here; no inline literals anywhere else."""

# Image signatures. Sniffing needs at least this many leading bytes.
SNIFF_MIN_BYTES = 12
JPEG_SIGNATURE = b"\xff\xd8\xff"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
GIF_SIGNATURES = (b"GIF87a", b"GIF89a")
RIFF_TAG = b"RIFF"
WEBP_TAG = b"WEBP"
WEBP_TAG_OFFSET = 8

# Prompt config
TEMPERATURE_MIN = 0.0
TEMPERATURE_MAX = 2.0
PROMPT_REQUIRED_TEXT_FIELDS = ("system", "prompt")

# Backends
BACKEND_OPENAI = "openai"
BACKEND_OLLAMA = "ollama"
OPENAI_CHAT_ENDPOINT = "/v1/chat/completions"
OLLAMA_CHAT_ENDPOINT = "/api/chat"
DEFAULT_TIMEOUT_SECONDS: float = 120.0

# Environment
ENV_URL = "NINELADIES_URL"
ENV_BACKEND = "NINELADIES_BACKEND"
ENV_MODEL = "NINELADIES_MODEL"
ENV_TIMEOUT = "NINELADIES_TIMEOUT"
ENV_LOG_LEVEL = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1

# Config errors
MSG_PROMPT_UNREADABLE = "Failed to read prompt file '%s': %s"
MSG_PROMPT_INVALID = "Failed to parse prompt file '%s': %s"
MSG_PROMPT_NOT_OBJECT = "expected a JSON object"
MSG_PROMPT_MISSING_FIELD = "missing field `%s`"
MSG_PROMPT_FIELD_TYPE = "field `%s` must be a %s"
MSG_TEMPERATURE_RANGE = "Temperature must be between 0.0 and 2.0, got %s"
MSG_MODEL_REQUIRED = "Model name required: pass --model or set \"model\" in the prompt file"
MSG_URL_REQUIRED = "Server URL required: pass --url or set NINELADIES_URL"
MSG_UNKNOWN_BACKEND = "Unknown backend %r (expected 'openai' or 'ollama')"
MSG_BAD_TIMEOUT = "Timeout must be a non-negative number of seconds, got %r"

# Image validation
MSG_FILE_NOT_FOUND = "File not found: %s"
MSG_FILE_UNREADABLE = "Cannot read file '%s': %s"
MSG_UNRECOGNIZED_FORMAT = "Not a valid image format (expected JPEG, PNG, WebP, or GIF): %s"

# Backend calls
MSG_REQUEST_FAILED = "Request failed: %s"
MSG_SERVER_STATUS = "Server returned %s: %s"
MSG_BAD_ENVELOPE = "Failed to parse response: %s"

# Batch driver
MSG_ITEM_FAILED = "Error processing '%s': %s"
MSG_DRY_RUN_OK = "✓ %s (%s, %d bytes)"
MSG_CALLING = "→ %s %s"
MSG_BACKEND_REQUIRED = "A backend is required unless dry_run is set"
MSG_RUN_SUMMARY = "Done: %d processed, %d emitted, %d failed"
MSG_CONFIG_ERROR = "Error: %s"
