import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from nineladies.prompt_config import PromptConfig

# Minimal headers: enough for sniffing, not decodable images.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01" + b"\x00" * 16
GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x80\x00" + b"\x00" * 16
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 16


@pytest.fixture
def prompt() -> PromptConfig:
    return PromptConfig(system="You describe images.", prompt="Describe this image.", temperature=0.2)


@pytest.fixture
def write_prompt(tmp_path: Path):
    """Write a prompt file from a dict (or raw text) and return its path."""

    def _write(data, name: str = "prompt.json") -> Path:
        p = tmp_path / name
        p.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def images(tmp_path: Path) -> dict[str, Path]:
    """red.png, photo.jpg and not-an-image.txt under tmp_path; missing.png does not exist."""
    red = tmp_path / "red.png"
    red.write_bytes(PNG_BYTES)
    photo = tmp_path / "photo.jpg"
    photo.write_bytes(JPEG_BYTES)
    text = tmp_path / "not-an-image.txt"
    text.write_text("just some words, definitely not pixels\n")
    return {
        "red": red,
        "photo": photo,
        "missing": tmp_path / "missing.png",
        "text": text,
    }


# ── stub inference server ─────────────────────────────────────────────────────


class StubServer:
    """Replies to every POST with a queued (status, body) and records request bodies."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, dict]] = []
        self.replies: list[tuple[int, object]] = []
        self.default: tuple[int, object] = (200, {"message": {"content": ""}})
        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._handler())
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def reply(self, status: int, body: object) -> None:
        self.replies.append((status, body))

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._httpd.shutdown()
        self._httpd.server_close()

    def _handler(self):
        stub = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self) -> None:
                length = int(self.headers.get("Content-Length", 0))
                stub.requests.append((self.path, json.loads(self.rfile.read(length) or b"{}")))
                status, body = stub.replies.pop(0) if stub.replies else stub.default
                raw = body.encode() if isinstance(body, str) else json.dumps(body).encode()
                self.send_response(status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(raw)))
                self.end_headers()
                self.wfile.write(raw)

            def log_message(self, *_) -> None:
                pass

        return Handler


@pytest.fixture
def stub_server():
    server = StubServer()
    server.start()
    yield server
    server.stop()
