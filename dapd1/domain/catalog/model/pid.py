"""Persistent identifiers for dataset artifacts.

A dataset is named by the base URL of its DAP access point. Every version of
the dataset gets three PIDs built from that URL by inserting a marker right
after the host segment:

    http://host:8080/opendap/data/fnoc1.nc
    host:8080/dataone_sdo_1/opendap/data/fnoc1.nc

The ``http://`` prefix is dropped because PIDs travel inside URL paths, where
``//`` gets collapsed by servlet containers.
"""

import re
from typing import NamedTuple

from dapd1.domain.catalog.model.value import ArtifactKind
from dapd1.domain.shared.error import MalformedLocatorError

SUPPORTED_SCHEME = "http"
PID_MARKER = "dataone"


class Locator(NamedTuple):
    origin: str  # host[:port], no scheme
    path: str  # starts with '/'


class ParsedPid(NamedTuple):
    origin: str
    kind: ArtifactKind
    serial_number: int
    path: str


_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://")
_PID_RE = re.compile(
    rf"^(?P<origin>[^/]*)/{PID_MARKER}_(?P<kind>sdo|smo|ore)_(?P<serial>[1-9][0-9]*)(?P<path>/.*)$"
)


def split_locator(locator: str) -> Locator:
    """Split a dataset URL into origin and path.

    Raises:
        MalformedLocatorError: If the URL uses a scheme other than http, or
            has no path separator after the origin.
    """
    rest = locator.strip()
    match = _SCHEME_RE.match(rest)
    if match:
        if match.group(1).lower() != SUPPORTED_SCHEME:
            raise MalformedLocatorError(
                f"Malformed URL '{locator}': only {SUPPORTED_SCHEME}:// URLs are supported"
            )
        rest = rest[match.end():]

    start_of_path = rest.find("/")
    if start_of_path < 0:
        raise MalformedLocatorError(f"Malformed URL '{locator}': could not find path separator '/'")
    if start_of_path == 0:
        raise MalformedLocatorError(f"Malformed URL '{locator}': missing host")

    return Locator(origin=rest[:start_of_path], path=rest[start_of_path:])


def mint_pid(locator: str, kind: ArtifactKind, serial_number: int) -> str:
    """Build the PID for one artifact of one dataset version.

    Deterministic: the same arguments always yield the same string.
    """
    if serial_number < 1:
        raise ValueError("serial number must be >= 1")
    origin, path = split_locator(locator)
    return f"{origin}/{PID_MARKER}_{ArtifactKind(kind).value}_{serial_number}{path}"


def parse_pid(pid: str) -> ParsedPid:
    """Recover origin, kind, serial number and path from a minted PID.

    Raises:
        ValueError: If the string was not produced by :func:`mint_pid`.
    """
    match = _PID_RE.match(pid)
    if not match:
        raise ValueError(f"not a minted PID: {pid!r}")
    return ParsedPid(
        origin=match["origin"],
        kind=ArtifactKind(match["kind"]),
        serial_number=int(match["serial"]),
        path=match["path"],
    )


def canonical_locator(locator: str) -> str:
    """The one spelling stored for a dataset URL.

    Every locator that mints the same PIDs (``host/p``, ``HTTP://host/p``,
    `` http://host/p``) maps to ``http://host/p``.
    """
    origin, path = split_locator(locator)
    return f"{SUPPORTED_SCHEME}://{origin}{path}"


def fetch_url(locator: str, suffix: str) -> str:
    """DAP response URL for a dataset, e.g. ``<base>.nc`` for netCDF."""
    return canonical_locator(locator) + suffix
