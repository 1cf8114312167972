"""Per-OS storage location and trust-store commands.

Each supported OS family is one ``TrustPlatform`` variant. The variant is
picked once by ``detect_platform`` and handed to the store and installer, so
no other module branches on the operating system.
"""

import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from .commands import CommandRunner, run_command
from .config import CAConfig
from .models import CommandResult


class TrustPlatform(ABC):
    """Storage directory resolution plus trust verification and installation."""

    name: str = ""

    def __init__(
        self,
        config: CAConfig,
        home: Path | None = None,
        environ: Mapping[str, str] | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self.config = config
        self.home = home if home is not None else Path.home()
        self.environ = environ if environ is not None else os.environ
        self.runner = runner

    @abstractmethod
    def resolve_storage_dir(self) -> Path:
        """Directory holding ca.crt and ca.key."""

    @abstractmethod
    def verify_command(self, ca_path: Path) -> list[str]:
        """Command that exits zero only if ca_path is trusted."""

    @abstractmethod
    def install_command(self, cert_path: Path) -> list[str]:
        """Command that adds cert_path to the trust store as a root."""

    def verify_trust(self, ca_path: Path) -> CommandResult:
        """Run the verification command.

        Raises:
            TrustCommandError: If the CA is not trusted or the command fails
        """
        return self.runner(self.verify_command(ca_path), self.config.command_timeout)

    def install_trust(self, cert_path: Path) -> CommandResult:
        """Run the installation command.

        Raises:
            TrustCommandError: If the trust store rejects the certificate
        """
        return self.runner(self.install_command(cert_path), self.config.command_timeout)


class DarwinTrust(TrustPlatform):
    """macOS keychain via the ``security`` tool."""

    name = "darwin"

    def resolve_storage_dir(self) -> Path:
        return self.home / "Library" / "Application Support" / self.config.app_name / "ca"

    def verify_command(self, ca_path: Path) -> list[str]:
        return ["security", "verify-cert", "-c", str(ca_path)]

    def install_command(self, cert_path: Path) -> list[str]:
        return ["security", "add-trusted-cert", "-d", "-r", "trustRoot", str(cert_path)]


class WindowsTrust(TrustPlatform):
    """Windows certificate store via ``certutil``, current-user Root store."""

    name = "win32"

    def resolve_storage_dir(self) -> Path:
        # Missing APPDATA degrades to an empty base segment instead of failing
        return Path(self.environ.get("APPDATA", "")) / self.config.app_name / "ca"

    def verify_command(self, ca_path: Path) -> list[str]:
        return ["certutil", "-verify", str(ca_path)]

    def install_command(self, cert_path: Path) -> list[str]:
        return ["certutil", "-user", "-addstore", "Root", str(cert_path)]


class LinuxTrust(TrustPlatform):
    """Linux and other Unix systems via OpenSSL and p11-kit."""

    name = "linux"

    def resolve_storage_dir(self) -> Path:
        return self.home / ".config" / self.config.app_dir_name / "ca"

    def verify_command(self, ca_path: Path) -> list[str]:
        # No -CAfile: OpenSSL checks against the system default store only
        return ["openssl", "verify", str(ca_path)]

    def install_command(self, cert_path: Path) -> list[str]:
        return ["trust", "anchor", "--store", str(cert_path)]


def detect_platform(
    config: CAConfig,
    system: str | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
    runner: CommandRunner = run_command,
) -> TrustPlatform:
    """Pick the trust platform for the running (or given) OS.

    Args:
        config: CA configuration
        system: sys.platform style identifier, defaults to the running OS
        home: Home directory override
        environ: Environment override
        runner: Process runner override

    Returns:
        DarwinTrust, WindowsTrust or LinuxTrust
    """
    system = system if system is not None else sys.platform
    if system == "darwin":
        platform_cls: type[TrustPlatform] = DarwinTrust
    elif system in ("win32", "cygwin"):
        platform_cls = WindowsTrust
    else:
        platform_cls = LinuxTrust
    return platform_cls(config, home=home, environ=environ, runner=runner)
