"""Ollama model client - Layer 2. Optional local model inference.

Only the fix-suggestion and chat collaborators talk to the model; the
analysis engines never do.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

import httpx

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen2.5-coder:7b"
OLLAMA_BASE_URL = "http://localhost:11434"
GENERATE_TIMEOUT = 300  # 5 minutes per generation

STATUS_MESSAGES = {
    429: "Rate limit exceeded. Please try again later.",
    402: "Payment required. Please add credits to your workspace.",
}


class ModelError(Exception):
    """Error communicating with the model."""


def _check_status(resp: httpx.Response) -> None:
    if resp.status_code == 200:
        return
    if resp.status_code in STATUS_MESSAGES:
        raise ModelError(STATUS_MESSAGES[resp.status_code])
    raise ModelError(f"Ollama returned {resp.status_code}: {resp.text[:200]}")


class OllamaClient:
    """Client for Ollama REST API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = OLLAMA_BASE_URL,
        timeout: float = GENERATE_TIMEOUT,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout)

    def is_ollama_running(self) -> bool:
        """Check if Ollama server is reachable."""
        try:
            resp = self._client.get(f"{self.base_url}/api/tags", timeout=5)
            return resp.status_code == 200
        except (httpx.ConnectError, httpx.TimeoutException):
            return False

    def is_model_available(self) -> bool:
        """Check if the configured model is downloaded."""
        try:
            resp = self._client.get(f"{self.base_url}/api/tags", timeout=10)
        except httpx.HTTPError:
            return False
        if resp.status_code != 200:
            return False
        try:
            models = resp.json().get("models", [])
        except (json.JSONDecodeError, AttributeError):
            return False
        names = [m.get("name", "") for m in models]
        return any(
            self.model == n or self.model == n.split(":")[0] or f"{self.model}:latest" == n
            for n in names
        )

    def ensure_ready(self) -> None:
        if not self.is_ollama_running():
            raise ModelError("Cannot connect to Ollama. Is it running? Try: ollama serve")
        if not self.is_model_available():
            raise ModelError(f"Model {self.model} is not available. Try: ollama pull {self.model}")

    def generate(
        self,
        prompt: str,
        system: str = "",
        temperature: float = 0.2,
        max_tokens: int = 4096,
    ) -> str:
        """Generate text from prompt. Returns raw text response."""
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }
        if system:
            payload["system"] = system

        logger.debug("generate model=%s prompt=%d chars", self.model, len(prompt))
        try:
            resp = self._client.post(f"{self.base_url}/api/generate", json=payload, timeout=self.timeout)
        except httpx.TimeoutException:
            raise ModelError(f"Model generation timed out after {self.timeout}s")
        except httpx.ConnectError:
            raise ModelError("Cannot connect to Ollama. Is it running? Try: ollama serve")
        except httpx.HTTPError as e:
            raise ModelError(f"Request to Ollama failed: {e}")

        _check_status(resp)
        try:
            data = resp.json()
        except json.JSONDecodeError:
            raise ModelError(f"Ollama returned invalid JSON: {resp.text[:200]}")
        return data.get("response", "")

    def chat(self, messages: list[dict[str, str]], system: str = "") -> Iterator[str]:
        """Stream a chat reply, yielding content fragments as they arrive."""
        if system:
            messages = [{"role": "system", "content": system}, *messages]
        payload = {"model": self.model, "messages": messages, "stream": True}

        try:
            with self._client.stream(
                "POST", f"{self.base_url}/api/chat", json=payload, timeout=self.timeout
            ) as resp:
                if resp.status_code != 200:
                    resp.read()
                    _check_status(resp)
                for line in resp.iter_lines():
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        raise ModelError(f"Model returned invalid JSON: {line[:200]}")
                    content = data.get("message", {}).get("content", "")
                    if content:
                        yield content
                    if data.get("done"):
                        break
        except httpx.TimeoutException:
            raise ModelError(f"Chat timed out after {self.timeout}s")
        except httpx.ConnectError:
            raise ModelError("Cannot connect to Ollama. Is it running? Try: ollama serve")
        except httpx.HTTPError as e:
            raise ModelError(f"Request to Ollama failed: {e}")
