"""Client for an OpenAI-compatible chat completions endpoint."""

import httpx

from tododash.errors import ProviderError
from tododash.providers.http import send

UNAVAILABLE = "Completion service is unavailable"


class CompletionClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        api_key: str | None,
        model: str,
        *,
        max_tokens: int = 300,
        temperature: float = 0.7,
    ):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(self, system: str, user: str) -> str:
        """Return the text of the first choice, or an empty string."""
        if not self.api_key:
            raise ProviderError("Completion provider is not configured")

        response = await send(
            self.http,
            "POST",
            f"{self.base_url}/chat/completions",
            unavailable=UNAVAILABLE,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
            },
        )
        choices = response.json().get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""
