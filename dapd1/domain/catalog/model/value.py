"""Catalog value objects and fixed constants."""

from enum import Enum

from pydantic import Field, field_validator

from dapd1.domain.shared.model.value import ValueObject


class ArtifactKind(str, Enum):
    """The three artifacts minted for every dataset version."""

    SDO = "sdo"  # science data object (netCDF)
    SMO = "smo"  # science metadata object (ISO 19115)
    ORE = "ore"  # resource map aggregating the SMO and SDO


SDO_FORMAT = "netcdf"
SMO_FORMAT = "INCITS 453-2009"  # ISO 19115 North America
ORE_FORMAT = "http://www.openarchives.org/ore/terms"

FORMATS: dict[ArtifactKind, str] = {
    ArtifactKind.SDO: SDO_FORMAT,
    ArtifactKind.SMO: SMO_FORMAT,
    ArtifactKind.ORE: ORE_FORMAT,
}

DEFAULT_ALGORITHM = "SHA-1"


class Digest(ValueObject):
    """Checksum and byte count computed over one read of an object."""

    checksum: str
    algorithm: str
    size: int = Field(ge=0)

    @field_validator("checksum")
    @classmethod
    def _lower_hex(cls, v: str) -> str:
        v = v.strip().lower()
        if not v or any(c not in "0123456789abcdef" for c in v):
            raise ValueError("checksum must be a hex digest")
        return v


class ChecksumInfo(ValueObject):
    checksum: str
    algorithm: str
