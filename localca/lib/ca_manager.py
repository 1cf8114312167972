"""CA manager guaranteeing a usable root CA exists."""

from collections.abc import Callable

from cryptography import x509

from . import signing
from .cert_utils import deserialize_certificate, deserialize_private_key
from .certificate_store import CertificateStore
from .config import CAConfig
from .errors import CACreationError, CAUnreadableError
from .logging_config import LOGGER
from .models import CAIdentity

CreateCA = Callable[..., CAIdentity]


class CAManager:
    """Creates the root CA once and loads it on every later use."""

    def __init__(
        self,
        config: CAConfig,
        store: CertificateStore,
        create_ca: CreateCA = signing.create_ca,
    ) -> None:
        """Initialize CA manager.

        Args:
            config: CA configuration with organization and validity policy
            store: Persistence for the CA files
            create_ca: CA generation capability
        """
        self.config = config
        self.store = store
        self._create_ca = create_ca

    def ensure_ca(self) -> CAIdentity:
        """Return the persisted CA, creating and persisting it on first use.

        Returns:
            CAIdentity shared by every leaf issued on this machine profile

        Raises:
            CANotFoundError: If ca.crt exists but ca.key does not
            CAUnreadableError: If the existing CA cannot be read or parsed
            CACreationError: If generating a new CA fails
            CertificateStoreError: If persisting a new CA fails
        """
        if self.store.ca_exists():
            return self.load_ca()

        try:
            identity = self._create_ca(
                organization=self.config.organization,
                country_code=self.config.country,
                state=self.config.state,
                locality=self.config.locality,
                validity_days=self.config.ca_validity_days,
                common_name=self.config.ca_common_name,
                key_size=self.config.key_size,
            )
        except Exception as e:
            raise CACreationError(f"CA creation failed: {e}") from e

        self.store.write_ca(identity)
        LOGGER.info("Created local CA in %s", self.store.resolve_ca_storage_directory())
        return identity

    def load_ca(self) -> CAIdentity:
        """Read the persisted CA and check both PEMs parse.

        Raises:
            CANotFoundError: If either CA file is absent
            CAUnreadableError: If the files are unreadable or corrupt
        """
        identity = self.store.read_ca()
        try:
            deserialize_certificate(identity.certificate_pem)
            deserialize_private_key(identity.private_key_pem)
        except (ValueError, TypeError, UnicodeEncodeError) as e:
            raise CAUnreadableError(
                f"CA files in {self.store.resolve_ca_storage_directory()} are corrupt: {e}"
            ) from e
        return identity

    def load_ca_certificate(self) -> x509.Certificate:
        """Return the parsed root certificate of the persisted CA."""
        return deserialize_certificate(self.load_ca().certificate_pem)
