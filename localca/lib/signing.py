"""Key generation and signing capabilities consumed by CAManager and LeafCertificateIssuer."""

from collections.abc import Sequence

from .cert_utils import (
    deserialize_certificate,
    deserialize_private_key,
    generate_private_key,
    serialize_certificate,
    serialize_private_key,
)
from .certificate_builder import CertificateBuilder
from .config import DistinguishedName
from .models import CAIdentity, CertificateBundle


def create_ca(
    organization: str,
    country_code: str,
    state: str,
    locality: str,
    validity_days: int,
    common_name: str | None = None,
    key_size: int = 2048,
) -> CAIdentity:
    """Generate a self-signed root CA.

    Args:
        organization: O attribute, also the CN when common_name is not given
        country_code: Two-letter C attribute
        state: ST attribute
        locality: L attribute
        validity_days: Root validity period in days
        common_name: Optional CN for the root
        key_size: RSA key size in bits

    Returns:
        CAIdentity with PEM certificate and PKCS8 private key
    """
    private_key = generate_private_key(key_size)
    subject_dn = DistinguishedName(
        country=country_code,
        state=state,
        locality=locality,
        organization=organization,
        common_name=common_name or organization,
    )
    certificate = CertificateBuilder.build_root_ca(
        subject_dn=subject_dn,
        private_key=private_key,
        validity_days=validity_days,
    )
    return CAIdentity(
        certificate_pem=serialize_certificate(certificate),
        private_key_pem=serialize_private_key(private_key),
    )


def create_cert(
    ca: CAIdentity,
    domains: Sequence[str],
    validity_days: int,
    key_size: int = 2048,
) -> CertificateBundle:
    """Issue a server certificate for domains, signed by ca.

    Args:
        ca: Root CA used as issuer
        domains: Hostnames for the SAN extension, kept in the given order
        validity_days: Leaf validity period in days
        key_size: RSA key size in bits for the fresh leaf key

    Returns:
        CertificateBundle with PEM certificate and PKCS8 private key

    Raises:
        ValueError: If the CA material cannot be parsed or domains is empty
    """
    issuer_cert = deserialize_certificate(ca.certificate_pem)
    issuer_key = deserialize_private_key(ca.private_key_pem)
    leaf_key = generate_private_key(key_size)

    certificate = CertificateBuilder.build_server_certificate(
        hostnames=tuple(domains),
        public_key=leaf_key.public_key(),
        issuer_cert=issuer_cert,
        issuer_key=issuer_key,
        validity_days=validity_days,
    )
    return CertificateBundle(
        certificate_pem=serialize_certificate(certificate),
        private_key_pem=serialize_private_key(leaf_key),
    )
