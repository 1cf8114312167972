"""On-disk persistence of the root CA identity."""

from pathlib import Path

from .errors import CANotFoundError, CAUnreadableError, CertificateStoreError
from .models import CAIdentity
from .platforms import TrustPlatform

CA_CERT_FILENAME = "ca.crt"
CA_KEY_FILENAME = "ca.key"


class CertificateStore:
    """Reads and writes ca.crt / ca.key in the platform storage directory."""

    def __init__(self, platform: TrustPlatform) -> None:
        """Initialize store.

        Args:
            platform: Trust platform that resolves the storage directory
        """
        self.platform = platform

    def resolve_ca_storage_directory(self) -> Path:
        """Return the directory holding the CA files (may not exist yet)."""
        return self.platform.resolve_storage_dir()

    @property
    def cert_path(self) -> Path:
        return self.resolve_ca_storage_directory() / CA_CERT_FILENAME

    @property
    def key_path(self) -> Path:
        return self.resolve_ca_storage_directory() / CA_KEY_FILENAME

    def ca_exists(self) -> bool:
        """Return True if the CA certificate file exists."""
        return self.cert_path.is_file()

    def read_ca(self) -> CAIdentity:
        """Load the CA certificate and key.

        Returns:
            CAIdentity read from disk

        Raises:
            CANotFoundError: If either file is absent
            CAUnreadableError: If a file exists but cannot be read as text
        """
        cert_path = self.cert_path
        key_path = self.key_path

        for path in (cert_path, key_path):
            if not path.exists():
                raise CANotFoundError(f"CA file not found: {path}")

        try:
            certificate_pem = cert_path.read_text(encoding="ascii")
            private_key_pem = key_path.read_text(encoding="ascii")
        except (OSError, UnicodeDecodeError) as e:
            raise CAUnreadableError(f"CA files in {cert_path.parent} are unreadable: {e}") from e

        return CAIdentity(certificate_pem=certificate_pem, private_key_pem=private_key_pem)

    def write_ca(self, identity: CAIdentity) -> None:
        """Persist the CA, creating the storage directory if needed.

        The key is written first and the certificate last, so ``ca_exists``
        never sees a certificate without its key. If the certificate write
        fails the key is removed again.

        Raises:
            CertificateStoreError: On any filesystem failure
        """
        storage_dir = self.resolve_ca_storage_directory()
        cert_path = storage_dir / CA_CERT_FILENAME
        key_path = storage_dir / CA_KEY_FILENAME

        try:
            storage_dir.mkdir(parents=True, exist_ok=True)
            key_path.write_text(identity.private_key_pem, encoding="ascii")
            key_path.chmod(0o600)
        except OSError as e:
            raise CertificateStoreError(f"failed to write CA key to {key_path}: {e}") from e

        try:
            cert_path.write_text(identity.certificate_pem, encoding="ascii")
        except OSError as e:
            key_path.unlink(missing_ok=True)
            raise CertificateStoreError(f"failed to write CA cert to {cert_path}: {e}") from e
