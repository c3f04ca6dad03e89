"""
Host environment model — the detector's output.

The raw distribution identity is mapped to a closed set of families
through ``FAMILY_BY_IDENTITY``. Anything not in the table is
``UNSUPPORTED``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_IDENTITY = "unknown"


class DistroFamily(StrEnum):
    """Package-management ecosystems the installer knows how to drive."""

    DEBIAN_LIKE = "debian_like"
    RPM_LIKE = "rpm_like"
    ARCH_LIKE = "arch_like"
    UNSUPPORTED = "unsupported"


FAMILY_BY_IDENTITY: dict[str, DistroFamily] = {
    "debian": DistroFamily.DEBIAN_LIKE,
    "ubuntu": DistroFamily.DEBIAN_LIKE,
    "kali": DistroFamily.DEBIAN_LIKE,
    "linuxmint": DistroFamily.DEBIAN_LIKE,
    "pop": DistroFamily.DEBIAN_LIKE,
    "raspbian": DistroFamily.DEBIAN_LIKE,
    "fedora": DistroFamily.RPM_LIKE,
    "centos": DistroFamily.RPM_LIKE,
    "rhel": DistroFamily.RPM_LIKE,
    "arch": DistroFamily.ARCH_LIKE,
    "manjaro": DistroFamily.ARCH_LIKE,
    "endeavouros": DistroFamily.ARCH_LIKE,
}


def family_for(identity: str) -> DistroFamily:
    """Map a normalized identity to its family."""
    return FAMILY_BY_IDENTITY.get(identity.strip().lower(), DistroFamily.UNSUPPORTED)


class HostEnvironment(BaseModel):
    """Facts about the host, computed once at startup."""

    model_config = ConfigDict(frozen=True)

    identity: str = UNKNOWN_IDENTITY
    family: DistroFamily = DistroFamily.UNSUPPORTED
    version_major: str | None = None
    source: str = Field(default="none", description="Which detection source answered")

    @field_validator("identity")
    @classmethod
    def _normalize_identity(cls, value: str) -> str:
        value = value.strip().lower()
        return value or UNKNOWN_IDENTITY

    @classmethod
    def from_identity(
        cls,
        identity: str,
        *,
        version_major: str | None = None,
        source: str = "none",
    ) -> HostEnvironment:
        normalized = identity.strip().lower() or UNKNOWN_IDENTITY
        return cls(
            identity=normalized,
            family=family_for(normalized),
            version_major=version_major,
            source=source,
        )

    @property
    def supported(self) -> bool:
        return self.family != DistroFamily.UNSUPPORTED
