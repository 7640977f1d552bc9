from __future__ import annotations

"""Report (and optionally delete) posts and profiles whose user is gone.

An account delete that fails part-way leaves such records behind.

Usage:
  python scripts/repair_orphans.py            # report only
  python scripts/repair_orphans.py --delete   # remove them
"""

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from devconnector.database import SessionLocal  # noqa: E402
from devconnector.services.account_service import find_orphans, purge_orphans  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find posts/profiles left without an owning user.")
    parser.add_argument("--delete", action="store_true", help="Delete the orphaned records.")
    args = parser.parse_args(argv)

    with SessionLocal() as db:
        orphans = find_orphans(db)
        print("orphaned posts:", orphans["posts"] or "none")
        print("orphaned profiles:", orphans["profiles"] or "none")
        if args.delete and (orphans["posts"] or orphans["profiles"]):
            removed = purge_orphans(db)
            print("removed:", removed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
