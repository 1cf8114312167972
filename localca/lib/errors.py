"""Exception hierarchy for local CA operations."""


class LocalCAError(Exception):
    """Base class for every error raised by localca."""


class CertificateStoreError(LocalCAError):
    """Filesystem failure while reading or writing CA artifacts."""


class CANotFoundError(CertificateStoreError):
    """CA certificate or key file is absent."""


class CAUnreadableError(CertificateStoreError):
    """CA files exist but cannot be read or parsed.

    Never a reason to regenerate the CA: a new root would silently invalidate
    trust already granted to the existing one.
    """


class CACreationError(LocalCAError):
    """Root CA generation failed."""


class CertificateGenerationError(LocalCAError):
    """Leaf certificate signing failed."""


class TrustCommandError(LocalCAError):
    """External trust-store command failed, timed out, or is missing."""

    def __init__(self, message: str, args: tuple[str, ...] = (), stderr: str = "") -> None:
        super().__init__(message)
        self.command = args
        self.stderr = stderr
