"""
Expire ACTIVE job posts whose listing duration has passed.
Backstop for expiration tasks lost by the broker.
Usage: python -m jobforge.scripts.expire_overdue
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from jobforge.database import SessionLocal, ensure_tables_exist
from jobforge.repos.job_post_repo import expire_overdue


def main() -> int:
    ensure_tables_exist()
    db = SessionLocal()
    try:
        count = expire_overdue(db)
    finally:
        db.close()
    print(f"Expired {count} overdue job posts.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
