"""Port for building aggregation (ORE resource map) documents."""

from typing import Protocol, Sequence


class ResourceMapBuilder(Protocol):
    def build(self, ore_id: str, smo_id: str, sdo_ids: Sequence[str]) -> bytes:
        """Serialize a resource map stating that ``smo_id`` documents ``sdo_ids``.

        Output embeds the generation time, so a rebuilt document differs from
        the stored one and would not match its recorded checksum.
        """
        ...
