"""Port for reading remote objects once and digesting them."""

from typing import Protocol

from dapd1.domain.catalog.model.value import Digest


class DigestFetcher(Protocol):
    def fetch_digest(self, url: str) -> Digest:
        """Stream ``url`` once, returning its checksum and byte count.

        Raises:
            TransportError: If the URL is unreachable or the response is
                not a success.
        """
        ...

    def digest_bytes(self, data: bytes) -> Digest:
        """Digest an in-memory document with the same algorithm."""
        ...
