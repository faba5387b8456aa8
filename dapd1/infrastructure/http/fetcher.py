"""HTTP adapter for the DigestFetcher port."""

import hashlib
import logging
from collections.abc import Iterable

import httpx

from dapd1.domain.catalog.model.value import DEFAULT_ALGORITHM, Digest
from dapd1.domain.catalog.port.fetcher import DigestFetcher
from dapd1.domain.shared.error import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


def hashlib_name(algorithm: str) -> str:
    """Map a DataONE algorithm name ("SHA-1", "MD5") to its hashlib name."""
    return algorithm.strip().lower().replace("-", "")


def digest_chunks(chunks: Iterable[bytes], algorithm: str = DEFAULT_ALGORITHM) -> Digest:
    """Hash and count a byte stream in one pass."""
    try:
        hasher = hashlib.new(hashlib_name(algorithm))
    except ValueError as e:
        raise ConfigurationError(f"Unsupported checksum algorithm: {algorithm}") from e

    size = 0
    for chunk in chunks:
        hasher.update(chunk)
        size += len(chunk)
    return Digest(checksum=hasher.hexdigest(), algorithm=algorithm, size=size)


class HttpDigestFetcher(DigestFetcher):
    """Streams a URL with httpx and digests the body as it arrives.

    The body is never buffered or re-read: remote DAP responses are built on
    demand and are not guaranteed to be byte-identical across requests.
    """

    def __init__(
        self,
        client: httpx.Client,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int | None = 64 * 1024,
    ) -> None:
        if hashlib_name(algorithm) not in hashlib.algorithms_available:
            raise ConfigurationError(f"Unsupported checksum algorithm: {algorithm}")
        self._client = client
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def fetch_digest(self, url: str) -> Digest:
        try:
            with self._client.stream("GET", url) as response:
                response.raise_for_status()
                digest = digest_chunks(response.iter_bytes(self.chunk_size), self.algorithm)
        except httpx.HTTPStatusError as e:
            logger.error("Fetch of %s failed with status %d", url, e.response.status_code)
            raise TransportError(
                f"Could not fetch '{url}': HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Fetch of %s failed: %s", url, e)
            raise TransportError(f"Could not fetch '{url}': {e}") from e

        logger.debug("Fetched %s: %d bytes, %s %s", url, digest.size, digest.algorithm, digest.checksum)
        return digest

    def digest_bytes(self, data: bytes) -> Digest:
        return digest_chunks([data], self.algorithm)
