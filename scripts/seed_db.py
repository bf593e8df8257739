from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from member_events.database.bootstrap import DEMO_OPERATOR, apply_seed_sql, ensure_demo_operator


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_operator(db_config)

    print(f"OK: Seeded database {db_config.get('database')} (login: {DEMO_OPERATOR['email']})")


if __name__ == "__main__":
    main()
