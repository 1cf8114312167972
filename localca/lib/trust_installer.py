"""Query and change OS trust of the local root CA."""

import tempfile
from pathlib import Path

from .ca_manager import CAManager
from .certificate_store import CertificateStore
from .logging_config import LOGGER
from .platforms import TrustPlatform


class SystemTrustInstaller:
    """Boolean trust predicates for interactive callers.

    Errors are logged with their cause and reported as ``False``; nothing is
    raised to the caller. Trust state lives in the OS and is re-queried on
    every call.
    """

    def __init__(
        self,
        store: CertificateStore,
        ca_manager: CAManager,
        platform: TrustPlatform,
        temp_dir: Path | None = None,
    ) -> None:
        self.store = store
        self.ca_manager = ca_manager
        self.platform = platform
        self.temp_dir = temp_dir

    @property
    def temp_cert_path(self) -> Path:
        base = self.temp_dir if self.temp_dir is not None else Path(tempfile.gettempdir())
        return base / self.ca_manager.config.temp_cert_name

    def is_trusted(self) -> bool:
        """Return True only if the CA exists and the OS reports it trusted."""
        ca_path = self.store.cert_path
        try:
            if not ca_path.exists():
                return False
            self.platform.verify_trust(ca_path)
        except Exception as e:
            LOGGER.info("Local CA is not trusted by %s: %s", self.platform.name, e)
            return False
        return True

    def install(self) -> bool:
        """Ensure the CA exists and add it to the OS trust store.

        Returns:
            True if the trust store accepted the CA, False on any failure
        """
        try:
            ca = self.ca_manager.ensure_ca()
        except Exception as e:
            LOGGER.error("Failed to install CA in trust store: %s", e)
            return False

        temp_path = self.temp_cert_path
        try:
            temp_path.write_text(ca.certificate_pem, encoding="ascii")
            self.platform.install_trust(temp_path)
        except Exception as e:
            LOGGER.error("Failed to install CA in trust store: %s", e)
            return False
        finally:
            self._remove_temp_file(temp_path)

        LOGGER.info("Installed local CA in %s trust store", self.platform.name)
        return True

    @staticmethod
    def _remove_temp_file(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            LOGGER.warning("Failed to remove temporary CA copy %s: %s", path, e)
