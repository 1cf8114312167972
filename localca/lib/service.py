"""Entry points used by the HTTPS-serving and UI collaborators."""

import os
import ssl
import tempfile
from collections.abc import Sequence
from pathlib import Path

from .ca_manager import CAManager
from .cert_utils import extract_certificate_metadata
from .certificate_cache import CertificateCache
from .certificate_store import CertificateStore
from .config import CAConfig
from .leaf_issuer import LeafCertificateIssuer
from .models import CertificateBundle, CertificateMetadata
from .platforms import TrustPlatform, detect_platform
from .trust_installer import SystemTrustInstaller


class CertificateService:
    """Wires store, CA manager, issuer, cache and trust installer together.

    Build one instance at application startup with ``from_config`` and pass
    it to every component that needs certificates; the leaf cache lives as
    long as this object.
    """

    def __init__(
        self,
        config: CAConfig,
        store: CertificateStore,
        ca_manager: CAManager,
        cache: CertificateCache,
        installer: SystemTrustInstaller,
    ) -> None:
        self.config = config
        self.store = store
        self.ca_manager = ca_manager
        self.cache = cache
        self.installer = installer

    @classmethod
    def from_config(
        cls,
        config: CAConfig | None = None,
        platform: TrustPlatform | None = None,
    ) -> "CertificateService":
        """Build the service for the running OS (or the given platform)."""
        config = config or CAConfig()
        platform = platform or detect_platform(config)
        store = CertificateStore(platform)
        ca_manager = CAManager(config, store)
        cache = CertificateCache(ca_manager, LeafCertificateIssuer(config))
        installer = SystemTrustInstaller(store, ca_manager, platform)
        return cls(config, store, ca_manager, cache, installer)

    def load_certificates(self, domains: Sequence[str] | None = None) -> CertificateBundle:
        """Bundle for domains; None means the default development domain."""
        if domains is None:
            domains = [self.config.default_domain]
        return self.generate_certificate(domains)

    def generate_certificate(self, domains: Sequence[str]) -> CertificateBundle:
        """Cache-backed issuance; the loopback aliases are always included."""
        return self.cache.get_or_issue(domains)

    def is_ca_installed_in_system(self) -> bool:
        return self.installer.is_trusted()

    def install_ca_in_system(self) -> bool:
        return self.installer.install()

    def get_ca_path(self) -> Path:
        return self.store.cert_path

    def describe_ca(self) -> CertificateMetadata | None:
        """Metadata of the persisted CA, or None before it has been created."""
        if not self.store.ca_exists():
            return None
        return extract_certificate_metadata(self.ca_manager.load_ca_certificate())

    def create_server_ssl_context(self, domains: Sequence[str] | None = None) -> ssl.SSLContext:
        """Server-side TLS context for domains, issuing the bundle if needed.

        Raises the issuance error instead of returning a context without a
        certificate.
        """
        return build_server_ssl_context(self.load_certificates(domains))


def build_server_ssl_context(bundle: CertificateBundle) -> ssl.SSLContext:
    """Load a bundle into a server SSLContext.

    ``ssl`` only accepts file paths, so the PEMs go through a private
    temporary directory that is removed before returning.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    with tempfile.TemporaryDirectory() as tmpdir:
        cert_path = os.path.join(tmpdir, "cert.pem")
        key_path = os.path.join(tmpdir, "key.pem")
        with open(cert_path, "w", encoding="ascii") as f:
            f.write(bundle.certificate_pem)
        with open(key_path, "w", encoding="ascii") as f:
            f.write(bundle.private_key_pem)
        context.load_cert_chain(certfile=cert_path, keyfile=key_path)
    return context
