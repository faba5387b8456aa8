"""Test doubles for the network and the clock."""

from datetime import UTC, datetime, timedelta

from dapd1.domain.catalog.model.value import Digest
from dapd1.domain.shared.error import TransportError
from dapd1.infrastructure.http.fetcher import digest_chunks

FNOC1 = "http://test.opendap.org/opendap/hyrax/data/nc/fnoc1.nc"


class FakeFetcher:
    """Serves fixed bodies per URL and records what was requested."""

    def __init__(self, bodies: dict[str, bytes] | None = None, failing: set[str] | None = None) -> None:
        self.bodies = bodies or {}
        self.failing = failing or set()
        self.requested: list[str] = []

    def fetch_digest(self, url: str) -> Digest:
        self.requested.append(url)
        if url in self.failing:
            raise TransportError(f"Could not fetch '{url}': HTTP 404")
        return digest_chunks([self.bodies.get(url, url.encode())])

    def digest_bytes(self, data: bytes) -> Digest:
        return digest_chunks([data])


class StepClock:
    """Returns a time one minute later on every call."""

    def __init__(self, start: datetime = datetime(2014, 6, 3, 10, 15, tzinfo=UTC)) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current
