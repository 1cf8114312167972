"""Local CA configuration dataclasses."""

from dataclasses import dataclass

from cryptography import x509
from cryptography.x509 import oid

# Always present in every leaf certificate, in this order.
LOOPBACK_ALIASES: tuple[str, ...] = ("localhost", "127.0.0.1", "::1")


@dataclass
class CAConfig:
    """Local development CA policy constants."""

    app_name: str = "Anglesite"
    organization: str = "Anglesite Development"
    country: str = "US"
    state: str = "Development"
    locality: str = "Local"
    ca_common_name: str = "Anglesite Development CA"
    ca_validity_days: int = 825
    leaf_validity_days: int = 365
    key_size: int = 2048
    default_domain: str = "anglesite.test"
    command_timeout: float = 60.0

    @property
    def app_dir_name(self) -> str:
        """Directory name used on platforms with lowercase config dirs."""
        return self.app_name.lower()

    @property
    def temp_cert_name(self) -> str:
        """File name of the CA certificate copy handed to trust commands."""
        return f"{self.app_name.lower()}-ca.crt"


@dataclass
class DistinguishedName:
    """X.509 Subject Distinguished Name."""

    country: str
    state: str
    locality: str
    organization: str
    common_name: str

    def to_x509_name(self) -> x509.Name:
        """Convert to cryptography x509.Name for certificate generation."""
        return x509.Name(
            [
                x509.NameAttribute(oid.NameOID.COUNTRY_NAME, self.country),
                x509.NameAttribute(oid.NameOID.STATE_OR_PROVINCE_NAME, self.state),
                x509.NameAttribute(oid.NameOID.LOCALITY_NAME, self.locality),
                x509.NameAttribute(oid.NameOID.ORGANIZATION_NAME, self.organization),
                x509.NameAttribute(oid.NameOID.COMMON_NAME, self.common_name),
            ]
        )
