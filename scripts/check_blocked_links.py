"""Find blocked slots whose blocking interview is no longer booked.

A slot in ``blocked`` status must point at a ``booked`` onsite schedule.
Anything else is left over from a failed or manual change and hides
availability from the public booking page.

Usage:
  python scripts/check_blocked_links.py          # report only
  python scripts/check_blocked_links.py --fix    # release them
"""
import argparse
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from app.extensions import db
from app.models.schedule import Schedule, AVAILABLE, BLOCKED, BOOKED


def find_dangling_blocks():
    rows = Schedule.query.filter_by(status=BLOCKED).all()
    return [s for s in rows if s.blocked_by is None or s.blocked_by.status != BOOKED]


def release(rows):
    for s in rows:
        s.status = AVAILABLE
        s.blocked_by_id = None
    db.session.commit()


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--fix", action="store_true", help="release dangling blocked slots")
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        rows = find_dangling_blocks()
        if not rows:
            print("No dangling blocked slots.")
            return 0
        for s in rows:
            blocker = s.blocked_by
            print(f"schedule={s.id} candidate={s.candidate_id} {s.date} {s.start_time}-{s.end_time} "
                  f"blocked_by={s.blocked_by_id} blocker_status={blocker.status if blocker else 'missing'}")
        if args.fix:
            release(rows)
            print(f"Released {len(rows)} slot(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
