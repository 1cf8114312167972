#!/usr/bin/env python3
"""Issue a leaf certificate for development hostnames and write it to disk."""

import argparse
import sys
from pathlib import Path

from localca.lib.config import CAConfig
from localca.lib.errors import LocalCAError
from localca.lib.logging_config import LOGGER
from localca.lib.service import CertificateService


def main(argv: list[str] | None = None) -> int:
    """Issue a certificate and write cert.pem / key.pem.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = argparse.ArgumentParser(description="Issue a local development certificate")
    parser.add_argument(
        "domains",
        nargs="*",
        help=f"Hostnames to cover (default: {CAConfig.default_domain})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("certs"),
        help="Output directory for cert.pem and key.pem (default: certs)",
    )
    parser.add_argument("--app-name", default=CAConfig.app_name)
    args = parser.parse_args(argv)

    service = CertificateService.from_config(CAConfig(app_name=args.app_name))

    try:
        bundle = service.load_certificates(args.domains or None)

        args.output_dir.mkdir(parents=True, exist_ok=True)
        cert_path = args.output_dir / "cert.pem"
        key_path = args.output_dir / "key.pem"
        cert_path.write_text(bundle.certificate_pem, encoding="ascii")
        key_path.write_text(bundle.private_key_pem, encoding="ascii")
        key_path.chmod(0o600)
    except (LocalCAError, OSError) as e:
        LOGGER.error("Certificate issuance failed: %s", e)
        return 1

    LOGGER.info("Certificate written:")
    LOGGER.info("  Cert: %s", cert_path)
    LOGGER.info("  Key: %s", key_path)
    if not service.is_ca_installed_in_system():
        LOGGER.warning("Local CA is not trusted yet. Next: run install_ca.py")
    return 0


if __name__ == "__main__":
    sys.exit(main())
