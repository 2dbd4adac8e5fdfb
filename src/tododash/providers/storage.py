"""Client for the object store holding avatars."""

from urllib.parse import quote

import httpx

from tododash.providers.http import send

UNAVAILABLE = "Storage service is unavailable"


class ObjectStorage:
    """Upload and delete objects in one public bucket."""

    def __init__(self, http: httpx.AsyncClient, base_url: str, api_key: str, bucket: str):
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket

    def _headers(self) -> dict[str, str]:
        return {"apikey": self.api_key, "Authorization": f"Bearer {self.api_key}"}

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{quote(key)}"

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Store an object and return its public URL."""
        await send(
            self.http,
            "POST",
            f"{self.base_url}/object/{self.bucket}/{quote(key)}",
            unavailable=UNAVAILABLE,
            headers={**self._headers(), "Content-Type": content_type},
            content=content,
        )
        return self.public_url(key)

    async def delete(self, key: str) -> None:
        await send(
            self.http,
            "DELETE",
            f"{self.base_url}/object/{self.bucket}",
            unavailable=UNAVAILABLE,
            headers=self._headers(),
            json={"prefixes": [key]},
        )
