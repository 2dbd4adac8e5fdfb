"""HTTP clients for the external identity, storage and completion providers."""

from tododash.providers.identity import IdentityClient
from tododash.providers.storage import ObjectStorage
from tododash.providers.completion import CompletionClient

__all__ = ["IdentityClient", "ObjectStorage", "CompletionClient"]
