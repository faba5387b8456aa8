import pytest

from dapd1.cli.commands.read import Entry, parse_line
from dapd1.domain.shared.error import ValidationError


class TestParseLine:
    def test_url(self):
        assert parse_line("http://host/data/fnoc1.nc\n") == Entry("http://host/data/fnoc1.nc", None)

    def test_replacement(self):
        entry = parse_line("  http://host/data/fnoc2.nc , http://host/data/fnoc1.nc  \n")
        assert entry == Entry("http://host/data/fnoc2.nc", "http://host/data/fnoc1.nc")

    @pytest.mark.parametrize("line", ["\n", "   ", "# datasets on test.opendap.org\n"])
    def test_skipped(self, line):
        assert parse_line(line) is None

    @pytest.mark.parametrize("line", ["a,b,c", "http://host/data/a.nc,", ",http://host/data/a.nc"])
    def test_bad_line(self, line):
        with pytest.raises(ValidationError, match="expected"):
            parse_line(line)
