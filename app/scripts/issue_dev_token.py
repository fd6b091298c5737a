from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Allow running this file directly: `python app/scripts/issue_dev_token.py`
if __package__ in (None, ""):
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from app.core.config import get_settings
from app.core.security import create_access_token


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mint a bearer token for local/dev verification.")
    parser.add_argument("--user-id", required=True, help="Subject (user id) to embed in the token")
    parser.add_argument("--role", default="user", choices=["user", "admin"], help="Role claim")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = get_settings()
    if settings.app_env == "production":
        print("Error: refusing to mint tokens in production", file=sys.stderr)
        return 2

    user_id = args.user_id.strip()
    if not user_id:
        print("Error: --user-id must not be empty", file=sys.stderr)
        return 2

    token = create_access_token(user_id, extra={"role": args.role})
    print({"ok": True, "user_id": user_id, "role": args.role, "access_token": token})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
