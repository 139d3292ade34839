from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock_system.timeclock_system.database.bootstrap import apply_seed_sql, ensure_demo_admin

logger = logging.getLogger("scripts.seed_db")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo employees, parents and an admin account.")
    parser.add_argument("--admin-username", default="admin")
    parser.add_argument("--admin-password", default="admin123")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    load_dotenv(REPO_ROOT / ".env", override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_admin(db_config, username=args.admin_username, password=args.admin_password)
    logger.info("Seeded database %s (admin=%s)", db_config.get("database"), args.admin_username)


if __name__ == "__main__":
    main()
