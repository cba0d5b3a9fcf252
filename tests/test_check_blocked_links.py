import os
import sys
from datetime import date

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'scripts')))

from check_blocked_links import find_dangling_blocks, release

DAY = date(2025, 3, 10)


def test_finds_blocks_whose_blocker_is_not_booked(make_slot):
    booked = make_slot(DAY, "10:00", "11:00", interview_type="onsite", status="booked")
    gone = make_slot(DAY, "13:00", "14:00", interview_type="onsite", status="cancelled")
    ok = make_slot(DAY, "09:00", "10:00", status="blocked", blocked_by=booked)
    dangling = make_slot(DAY, "14:00", "15:00", status="blocked", blocked_by=gone)
    orphan = make_slot(DAY, "16:00", "17:00", status="blocked")

    rows = find_dangling_blocks()
    assert {s.id for s in rows} == {dangling.id, orphan.id}

    release(rows)
    assert find_dangling_blocks() == []
    assert (dangling.status, dangling.blocked_by_id) == ("available", None)
    assert ok.status == "blocked"
