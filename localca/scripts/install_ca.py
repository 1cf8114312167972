#!/usr/bin/env python3
"""Create the local CA if needed and install it into the OS trust store."""

import argparse
import sys

from localca.lib.config import CAConfig
from localca.lib.logging_config import LOGGER
from localca.lib.service import CertificateService


def main(argv: list[str] | None = None) -> int:
    """Install the local root CA.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Install the local development CA")
    parser.add_argument(
        "--app-name",
        default=CAConfig.app_name,
        help=f"Application name used for the CA storage directory (default: {CAConfig.app_name})",
    )
    args = parser.parse_args(argv)

    service = CertificateService.from_config(CAConfig(app_name=args.app_name))

    if service.is_ca_installed_in_system():
        LOGGER.info("Local CA already trusted: %s", service.get_ca_path())
        return 0

    LOGGER.info("Installing local CA...")
    if not service.install_ca_in_system():
        LOGGER.error("Local CA installation failed")
        return 1

    LOGGER.info("Local CA installed: %s", service.get_ca_path())
    return 0


if __name__ == "__main__":
    sys.exit(main())
