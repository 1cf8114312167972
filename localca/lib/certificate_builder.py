"""Certificate builder for X.509 certificate construction."""

from datetime import datetime, timedelta, timezone

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from .cert_utils import build_subject_alt_names, generate_serial_number
from .config import DistinguishedName

# Tolerates clock skew between the issuing host and the browser
BACKDATE = timedelta(minutes=5)

# ub-common-name from X.520
MAX_COMMON_NAME_LENGTH = 64


class CertificateBuilder:
    """Builds X.509 certificates for the local root CA and its server leaves."""

    @staticmethod
    def build_root_ca(
        subject_dn: DistinguishedName,
        private_key: RSAPrivateKey,
        validity_days: int,
    ) -> x509.Certificate:
        """Build self-signed root CA certificate.

        Args:
            subject_dn: Distinguished name for certificate subject
            private_key: RSA private key for signing
            validity_days: Certificate validity period in days

        Returns:
            Self-signed X.509 certificate with CA extensions, limited to
            signing end-entity certificates (pathlen:0)
        """
        subject = subject_dn.to_x509_name()
        not_before = datetime.now(timezone.utc) - BACKDATE
        not_after = not_before + timedelta(days=validity_days)
        public_key = private_key.public_key()

        builder = (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(subject)
            .public_key(public_key)
            .serial_number(generate_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .add_extension(
                x509.BasicConstraints(ca=True, path_length=0),
                critical=True,
            )
            .add_extension(
                x509.KeyUsage(
                    digital_signature=False,
                    content_commitment=False,
                    key_encipherment=False,
                    data_encipherment=False,
                    key_agreement=False,
                    key_cert_sign=True,
                    crl_sign=True,
                    encipher_only=False,
                    decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(
                x509.SubjectKeyIdentifier.from_public_key(public_key),
                critical=False,
            )
        )

        return builder.sign(private_key, hashes.SHA256())

    @staticmethod
    def build_server_certificate(
        hostnames: tuple[str, ...],
        public_key: RSAPublicKey,
        issuer_cert: x509.Certificate,
        issuer_key: RSAPrivateKey,
        validity_days: int,
    ) -> x509.Certificate:
        """Build TLS server certificate for the given hostnames, signed by the root CA.

        Every hostname goes into the SAN extension in the given order, which is
        what browsers match against. The subject CN is the first hostname that
        fits the 64 character X.520 limit. When none fits the subject is left
        empty and the SAN extension is marked critical.

        Args:
            hostnames: DNS names and IP literals to cover, at least one
            public_key: Leaf public key
            issuer_cert: Root CA certificate (issuer)
            issuer_key: Root CA private key for signing
            validity_days: Certificate validity period in days

        Returns:
            X.509 end-entity certificate with serverAuth extended key usage

        Raises:
            ValueError: If no hostnames are given
        """
        if not hostnames:
            raise ValueError("at least one hostname is required")

        common_name = next((name for name in hostnames if len(name) <= MAX_COMMON_NAME_LENGTH), None)
        attributes = []
        if common_name is not None:
            attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, common_name))

        not_before = datetime.now(timezone.utc) - BACKDATE
        not_after = not_before + timedelta(days=validity_days)

        builder = (
            x509.CertificateBuilder()
            .subject_name(x509.Name(attributes))
            .issuer_name(issuer_cert.subject)
            .public_key(public_key)
            .serial_number(generate_serial_number())
            .not_valid_before(not_before)
            .not_valid_after(not_after)
            .add_extension(
                x509.BasicConstraints(ca=False, path_length=None),
                critical=True,
            )
            .add_extension(
                x509.KeyUsage(
                    digital_signature=True,
                    content_commitment=False,
                    key_encipherment=True,
                    data_encipherment=False,
                    key_agreement=False,
                    key_cert_sign=False,
                    crl_sign=False,
                    encipher_only=False,
                    decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(
                x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]),
                critical=False,
            )
            .add_extension(
                build_subject_alt_names(hostnames),
                # RFC 5280 4.2.1.6: critical when the subject is empty
                critical=common_name is None,
            )
            .add_extension(
                x509.AuthorityKeyIdentifier.from_issuer_public_key(issuer_key.public_key()),
                critical=False,
            )
        )

        return builder.sign(issuer_key, hashes.SHA256())
