from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Allow running this file directly: `python app/scripts/add_session_video.py`
if __package__ in (None, ""):
    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from app.db.session import SessionLocal
from app.models import VIDEO_STATUS_DRAFT, VIDEO_STATUS_UPLOADED, SessionVideo


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register a catalog video for local/dev verification.")
    parser.add_argument("--title", required=True, help="Video title")
    parser.add_argument("--status", default=VIDEO_STATUS_UPLOADED, choices=[VIDEO_STATUS_UPLOADED, VIDEO_STATUS_DRAFT])
    parser.add_argument("--duration", type=float, default=None, help="Declared duration in seconds (optional)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    title = args.title.strip()
    if not title:
        print("Error: --title must not be empty", file=sys.stderr)
        return 2
    if args.duration is not None and args.duration <= 0:
        print("Error: --duration must be positive", file=sys.stderr)
        return 2

    with SessionLocal() as db:
        video = SessionVideo(title=title, status=args.status, video_duration=args.duration)
        db.add(video)
        db.commit()
        video_id = video.id

    print({"ok": True, "id": video_id, "title": title, "status": args.status, "duration": args.duration})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
