"""Check that MONGODB_URI is reachable and writable.

Connects once, lists the collections, inserts and deletes a probe document in
the ``test`` collection, then exits. Exit status is 0 even when the check
failed (the failure is logged); 1 only for an error that escaped the probe.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.school_management.school_management.common.logging_utils import configure_logging
from src.school_management.school_management.database.connection import (
    DBConfig,
    DatabaseConnection,
    probe_client_options,
)
from src.school_management.school_management.database.probe import (
    ConnectivityProbe,
    install_process_handlers,
)


def main() -> None:
    load_dotenv(override=False)
    configure_logging()

    config = DBConfig(
        uri=os.getenv("MONGODB_URI", ""),
        options=probe_client_options(),
    )
    try:
        ConnectivityProbe(DatabaseConnection(config)).run()
    finally:
        sys.exit(0)


if __name__ == "__main__":
    install_process_handlers()
    main()
