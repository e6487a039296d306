"""
Issue a session token for local development, signed like the identity provider's.
Usage: python -m jobforge.scripts.issue_token <user_id> <email> [name]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from jobforge.core.security import create_identity_token


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("Usage: python -m jobforge.scripts.issue_token <user_id> <email> [name]")
        return 1
    user_id, email = args[0].strip(), args[1].strip()
    name = args[2].strip() if len(args) > 2 else None
    print(create_identity_token(user_id, email, name))
    return 0


if __name__ == "__main__":
    sys.exit(main())
