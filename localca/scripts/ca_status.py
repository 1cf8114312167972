#!/usr/bin/env python3
"""Report where the local CA lives and whether the OS trusts it."""

import argparse
import json
import sys

from localca.lib.config import CAConfig
from localca.lib.errors import LocalCAError
from localca.lib.logging_config import LOGGER
from localca.lib.service import CertificateService


def main(argv: list[str] | None = None) -> int:
    """Print CA status as JSON on stdout.

    Returns:
        Exit code (0 for success, 1 if the CA files are unusable)
    """
    parser = argparse.ArgumentParser(description="Show local development CA status")
    parser.add_argument("--app-name", default=CAConfig.app_name)
    args = parser.parse_args(argv)

    service = CertificateService.from_config(CAConfig(app_name=args.app_name))

    try:
        metadata = service.describe_ca()
    except LocalCAError as e:
        LOGGER.error("Local CA is unusable: %s", e)
        return 1

    status = {
        "path": str(service.get_ca_path()),
        "exists": metadata is not None,
        "trusted": service.is_ca_installed_in_system(),
        "certificate": metadata,
    }
    print(json.dumps(status, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
