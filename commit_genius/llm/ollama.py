"""Ollama LLM Client for Local Models"""

import os
import json
import http.client
import socket
import urllib.request
import urllib.error

from commit_genius.llm.base import LLMClient, LLMResponse, ProviderUnavailable, SYSTEM_PROMPT


class OllamaClient(LLMClient):
    """Ollama client for local models. Requires: ollama serve"""

    DEFAULT_MODEL = "codellama"
    DEFAULT_HOST = "http://localhost:11434"
    DEFAULT_TIMEOUT = 60

    def __init__(self, model: str | None = None, host: str | None = None, timeout: int | None = None):
        self.model = model or self.DEFAULT_MODEL
        self.host = (host or os.environ.get("OLLAMA_HOST", self.DEFAULT_HOST)).rstrip('/')
        self.timeout = timeout or int(os.environ.get("CM_TIMEOUT", self.DEFAULT_TIMEOUT))

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    def _call_api(self, prompt: str) -> dict:
        """Make a single API call to Ollama."""
        url = f"{self.host}/api/generate"
        payload = {
            "model": self.model,
            "prompt": prompt,
            "system": SYSTEM_PROMPT,
            "stream": False,
            "options": {
                "temperature": 0.4,
            }
        }

        data = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})

        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def generate(self, prompt: str) -> LLMResponse:
        """Call Ollama's generate API once."""
        try:
            result = self._call_api(prompt)
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise ProviderUnavailable(f"Model '{self.model}' not found. Run: ollama pull {self.model}")
            raise ProviderUnavailable(f"Ollama error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise ProviderUnavailable(f"Request timed out after {self.timeout}s")
            if "Connection refused" in str(e):
                raise ProviderUnavailable("Ollama not running. Start with: ollama serve")
            raise ProviderUnavailable(f"Ollama request failed: {e}")
        except socket.timeout:
            raise ProviderUnavailable(f"Request timed out after {self.timeout}s")
        except json.JSONDecodeError:
            raise ProviderUnavailable("Invalid response from Ollama.")
        except http.client.HTTPException as e:
            raise ProviderUnavailable(f"Incomplete response from Ollama: {e}")
        except OSError as e:
            raise ProviderUnavailable(f"Connection to Ollama lost: {e}")

        if not isinstance(result, dict):
            raise ProviderUnavailable("Invalid response from Ollama.")
        return self._finish(result.get("response", ""), tokens_used=result.get("eval_count", 0))
