from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.school_management.school_management.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(mongo_config=dict(settings.MONGO_CONFIG))

    container.attendance_repo.ensure_indexes()
    names = container.conn.database().list_collection_names()
    container.conn.close()
    print(f"OK: attendance indexes ready (collections={len(names)})")


if __name__ == "__main__":
    main()
