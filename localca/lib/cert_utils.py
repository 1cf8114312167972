"""Certificate utility functions for key generation, serialization, and metadata extraction."""

import ipaddress
import uuid

from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from localca.lib.models import CertificateMetadata


def generate_private_key(key_size: int = 2048) -> RSAPrivateKey:
    """Generate RSA private key with specified size."""
    return rsa.generate_private_key(
        public_exponent=65537,
        key_size=key_size,
    )


def serialize_private_key(key: RSAPrivateKey) -> str:
    """Serialize private key to PEM text (PKCS8, no encryption)."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def deserialize_private_key(pem_data: str) -> RSAPrivateKey:
    """Deserialize private key from PEM text."""
    key = serialization.load_pem_private_key(pem_data.encode("ascii"), password=None)
    if not isinstance(key, RSAPrivateKey):
        raise ValueError("expected RSA private key")
    return key


def serialize_certificate(cert: x509.Certificate) -> str:
    """Serialize certificate to PEM text."""
    return cert.public_bytes(serialization.Encoding.PEM).decode("ascii")


def deserialize_certificate(pem_data: str) -> x509.Certificate:
    """Deserialize certificate from PEM text."""
    return x509.load_pem_x509_certificate(pem_data.encode("ascii"))


def generate_serial_number() -> int:
    """Generate certificate serial number from UUID4.

    UUID v4 gives ~122 bits of randomness, above the 64-bit CSPRNG minimum
    browsers expect from a serial number.

    Returns:
        Integer serial number for x509.CertificateBuilder.serial_number()
    """
    return uuid.uuid4().int


def get_certificate_serial_hex(cert: x509.Certificate) -> str:
    """Return certificate serial number as hex with colons (e.g., 3A:F2:B1:...)."""
    serial_hex = f"{cert.serial_number:X}"
    if len(serial_hex) % 2 != 0:
        serial_hex = "0" + serial_hex
    return ":".join(serial_hex[i : i + 2] for i in range(0, len(serial_hex), 2))


def to_general_name(hostname: str) -> x509.GeneralName:
    """Map a hostname or IP literal to the matching SAN entry type."""
    try:
        return x509.IPAddress(ipaddress.ip_address(hostname))
    except ValueError:
        return x509.DNSName(hostname)


def build_subject_alt_names(hostnames: list[str] | tuple[str, ...]) -> x509.SubjectAlternativeName:
    """Build a SAN extension preserving the given hostname order."""
    return x509.SubjectAlternativeName([to_general_name(name) for name in hostnames])


def get_subject_alt_names(cert: x509.Certificate) -> list[str]:
    """Return SAN entries as strings in certificate order, or [] if absent."""
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        return []
    return [str(name.value) for name in san]


def extract_certificate_metadata(cert: x509.Certificate) -> CertificateMetadata:
    """Extract certificate metadata for diagnostics output.

    Args:
        cert: X.509 certificate to extract metadata from

    Returns:
        CertificateMetadata with serial, CN and validity window. SANs are
        included only when the certificate carries them.
    """
    cn = cert.subject.get_attributes_for_oid(x509.NameOID.COMMON_NAME)[0].value
    if not isinstance(cn, str):
        raise ValueError("CN must be string")

    metadata = CertificateMetadata(
        serialNumber=get_certificate_serial_hex(cert),
        commonName=cn,
        notBefore=cert.not_valid_before_utc.isoformat(),
        expiry=cert.not_valid_after_utc.isoformat(),
    )

    alt_names = get_subject_alt_names(cert)
    if alt_names:
        metadata["subjectAltNames"] = alt_names

    return metadata


def validate_certificate_chain(leaf_cert: x509.Certificate, root_cert: x509.Certificate) -> bool:
    """Verify the leaf was signed by the root and the root is self-signed.

    Returns True if chain is valid, False otherwise.
    """
    try:
        leaf_cert.verify_directly_issued_by(root_cert)
        root_cert.verify_directly_issued_by(root_cert)
        return True
    except (ValueError, TypeError, InvalidSignature):
        return False
