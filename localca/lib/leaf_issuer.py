"""Leaf certificate issuance for a set of hostnames."""

from collections.abc import Callable, Iterable

from . import signing
from .config import LOOPBACK_ALIASES, CAConfig
from .errors import CertificateGenerationError
from .logging_config import LOGGER
from .models import CAIdentity, CertificateBundle, DomainSet

CreateCert = Callable[..., CertificateBundle]


class LeafCertificateIssuer:
    """Signs server certificates for a DomainSet with the local CA."""

    def __init__(self, config: CAConfig, create_cert: CreateCert = signing.create_cert) -> None:
        self.config = config
        self._create_cert = create_cert

    @staticmethod
    def canonicalize(requested_domains: Iterable[str]) -> DomainSet:
        """Remove duplicates and append the loopback aliases.

        Request order is kept for the certificate itself; ordering only
        stops mattering in ``DomainSet.cache_key``.
        """
        names = list(dict.fromkeys(requested_domains))
        names.extend(alias for alias in LOOPBACK_ALIASES if alias not in names)
        return DomainSet(names=tuple(names))

    def issue(self, ca: CAIdentity, domains: DomainSet) -> CertificateBundle:
        """Sign a leaf certificate covering domains.

        Raises:
            CertificateGenerationError: On any signing failure, cause chained
        """
        try:
            bundle = self._create_cert(
                ca=ca,
                domains=list(domains.names),
                validity_days=self.config.leaf_validity_days,
            )
        except Exception as e:
            LOGGER.error("Failed to generate certificate for %s: %s", domains.cache_key, e)
            raise CertificateGenerationError(f"Certificate generation failed: {e}") from e

        LOGGER.info("Issued certificate for %s", ", ".join(domains.names))
        return bundle
