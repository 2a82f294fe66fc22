from __future__ import annotations

import math
from datetime import timedelta

import pytest


def _seed_closed(repo, user_id, start, count):
    records = []
    for i in range(count):
        check_in = start + timedelta(days=i)
        records.append(repo.add_closed(user_id=user_id, check_in_time=check_in, check_out_time=check_in + timedelta(hours=8)))
    return records


def test_page_two_of_twelve_records(ledger, attendance_repo, fixed_now):
    records = _seed_closed(attendance_repo, "user_001", fixed_now, 12)
    newest_first = sorted(records, key=lambda r: r.check_in, reverse=True)

    result = ledger.list_history("user_001", page=2, limit=5)

    assert result.total == 12
    assert result.page == 2
    assert result.last_page == 3
    assert result.data == newest_first[5:10]


@pytest.mark.parametrize("count,limit", [(1, 1), (7, 3), (10, 5), (11, 4)])
def test_pages_concatenate_to_full_history(ledger, attendance_repo, fixed_now, count, limit):
    records = _seed_closed(attendance_repo, "user_001", fixed_now, count)

    first = ledger.list_history("user_001", page=1, limit=limit)
    assert first.last_page == math.ceil(count / limit)

    collected = []
    for page in range(1, first.last_page + 1):
        collected.extend(ledger.list_history("user_001", page=page, limit=limit).data)

    assert [r.attendance_id for r in collected] == [
        r.attendance_id for r in sorted(records, key=lambda r: r.check_in, reverse=True)
    ]


def test_equal_check_in_times_paginate_without_duplicates(ledger, attendance_repo, fixed_now):
    for _ in range(6):
        attendance_repo.add_closed(user_id="user_001", check_in_time=fixed_now, check_out_time=fixed_now + timedelta(hours=1))

    pages = [ledger.list_history("user_001", page=p, limit=4).data for p in (1, 2)]
    ids = [r.attendance_id for page in pages for r in page]

    assert len(ids) == 6
    assert len(set(ids)) == 6
    assert ids == sorted(ids, reverse=True)


def test_history_is_scoped_to_user_and_includes_open_session(ledger, attendance_repo, fixed_now):
    _seed_closed(attendance_repo, "someone_else", fixed_now, 3)
    _seed_closed(attendance_repo, "user_001", fixed_now, 2)
    opened = ledger.check_in("user_001", now=fixed_now + timedelta(days=10))

    result = ledger.list_history("user_001", page=1, limit=10)

    assert result.total == 3
    assert result.data[0] == opened
    assert all(r.user_id == "user_001" for r in result.data)


def test_empty_history(ledger):
    result = ledger.list_history("user_001", page=1, limit=5)

    assert result.data == []
    assert result.total == 0
    assert result.last_page == 0
    assert result.to_dict() == {"data": [], "total": 0, "page": 1, "lastPage": 0}


def test_page_past_the_end_is_empty(ledger, attendance_repo, fixed_now):
    _seed_closed(attendance_repo, "user_001", fixed_now, 3)

    result = ledger.list_history("user_001", page=4, limit=5)

    assert result.data == []
    assert result.total == 3
    assert result.last_page == 1
