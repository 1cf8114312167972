"""Data models for local CA operations."""

from dataclasses import dataclass
from datetime import datetime
from typing import NotRequired, TypedDict


@dataclass(frozen=True)
class CAIdentity:
    """Root CA certificate and private key, both PEM encoded."""

    certificate_pem: str
    private_key_pem: str


@dataclass(frozen=True)
class CertificateBundle:
    """Leaf certificate and private key, both PEM encoded."""

    certificate_pem: str
    private_key_pem: str


@dataclass(frozen=True)
class DomainSet:
    """Hostnames a leaf certificate must cover.

    ``names`` keeps the caller's request order (duplicates removed) followed by
    any missing loopback alias. ``canonical`` and ``cache_key`` are order
    insensitive, so permutations of the same request share a cache entry.
    """

    names: tuple[str, ...]

    @property
    def canonical(self) -> tuple[str, ...]:
        return tuple(sorted(self.names))

    @property
    def cache_key(self) -> str:
        return ",".join(self.canonical)


@dataclass(frozen=True)
class CachedIssuance:
    """Cached leaf bundle with the moment it stops being served."""

    bundle: CertificateBundle
    expires_at: datetime


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external trust-store command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class CertificateMetadata(TypedDict):
    """Diagnostic summary of a certificate."""

    serialNumber: str
    commonName: str
    notBefore: str
    expiry: str
    subjectAltNames: NotRequired[list[str]]
