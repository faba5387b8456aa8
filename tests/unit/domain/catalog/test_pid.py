import pytest

from dapd1.domain.catalog.model.pid import (
    canonical_locator,
    fetch_url,
    mint_pid,
    parse_pid,
    split_locator,
)
from dapd1.domain.catalog.model.value import ArtifactKind
from dapd1.domain.shared.error import MalformedLocatorError


class TestMintPid:
    def test_inserts_marker_after_host(self):
        url = "http://host/path/fnoc1.nc"
        assert mint_pid(url, ArtifactKind.SDO, 1) == "host/dataone_sdo_1/path/fnoc1.nc"
        assert mint_pid(url, ArtifactKind.SMO, 1) == "host/dataone_smo_1/path/fnoc1.nc"
        assert mint_pid(url, ArtifactKind.ORE, 1) == "host/dataone_ore_1/path/fnoc1.nc"

    def test_keeps_port_in_origin(self):
        pid = mint_pid("http://localhost:8080/opendap/data/nc/coads.nc", ArtifactKind.SMO, 12)
        assert pid == "localhost:8080/dataone_smo_12/opendap/data/nc/coads.nc"

    def test_is_deterministic(self):
        url = "http://test.opendap.org/opendap/hyrax/data/nc/fnoc1.nc"
        assert mint_pid(url, ArtifactKind.ORE, 3) == mint_pid(url, ArtifactKind.ORE, 3)

    def test_accepts_locator_without_scheme(self):
        assert mint_pid("host/a/b.nc", "sdo", 2) == "host/dataone_sdo_2/a/b.nc"

    @pytest.mark.parametrize(
        "url",
        ["https://host/path/data.nc", "ftp://host/path/data.nc", "HTTPS://host/x"],
    )
    def test_rejects_other_schemes(self, url: str):
        with pytest.raises(MalformedLocatorError):
            mint_pid(url, ArtifactKind.SDO, 1)

    @pytest.mark.parametrize("url", ["http://host", "hostonly", "http:///path/data.nc"])
    def test_rejects_locator_without_path(self, url: str):
        with pytest.raises(MalformedLocatorError):
            mint_pid(url, ArtifactKind.SDO, 1)

    def test_rejects_serial_below_one(self):
        with pytest.raises(ValueError):
            mint_pid("http://host/path", ArtifactKind.SDO, 0)


class TestParsePid:
    def test_recovers_parts(self):
        parsed = parse_pid("host:8080/dataone_ore_7/path/fnoc1.nc")
        assert parsed.origin == "host:8080"
        assert parsed.kind == ArtifactKind.ORE
        assert parsed.serial_number == 7
        assert parsed.path == "/path/fnoc1.nc"

    def test_rejects_unminted_string(self):
        with pytest.raises(ValueError):
            parse_pid("host/path/fnoc1.nc")


class TestLocator:
    def test_split(self):
        locator = split_locator("http://host/path/fnoc1.nc")
        assert locator.origin == "host"
        assert locator.path == "/path/fnoc1.nc"

    def test_fetch_url_appends_suffix(self):
        assert fetch_url("http://host/path/fnoc1.nc", ".nc") == "http://host/path/fnoc1.nc.nc"
        assert fetch_url("http://host/path/fnoc1.nc", ".iso") == "http://host/path/fnoc1.nc.iso"

    @pytest.mark.parametrize(
        "url",
        [
            "http://host:8080/path/fnoc1.nc",
            "host:8080/path/fnoc1.nc",
            "HTTP://host:8080/path/fnoc1.nc",
            "  http://host:8080/path/fnoc1.nc\n",
        ],
    )
    def test_canonical_locator(self, url: str):
        assert canonical_locator(url) == "http://host:8080/path/fnoc1.nc"

    def test_canonical_locator_rejects_other_schemes(self):
        with pytest.raises(MalformedLocatorError):
            canonical_locator("https://host/path/fnoc1.nc")

    def test_fetch_url_uses_http_form(self):
        assert fetch_url("host/path/fnoc1.nc", ".nc") == "http://host/path/fnoc1.nc.nc"
