from __future__ import annotations

import pytest

from dink_admin.core.exceptions import ConflictError
from dink_admin.subscribers.model import SubscriberCounts
from dink_admin.subscribers.service import SubscriberService


class InMemorySubscribers:
    def __init__(self, rows=()):
        self.rows = {r["email"]: dict(r) for r in rows}
        self.last_search = None

    def search(self, **kwargs):
        self.last_search = kwargs
        return list(self.rows.values()), len(self.rows)

    def get_by_email(self, email):
        return self.rows.get(email)

    def create(self, fields):
        row = {"id": str(len(self.rows) + 1), **fields}
        self.rows[row["email"]] = row
        return row

    def update(self, subscriber_id, fields):
        for row in self.rows.values():
            if row["id"] == subscriber_id:
                row.update(fields)
                return row
        return None

    def count(self, *, active=None, created_from=None, created_before=None):
        return {True: 8, False: 2}.get(active, 3 if created_before is None else 2)


@pytest.mark.parametrize(
    "this_week, last_week, expected",
    [(3, 2, "+50.0%"), (1, 2, "-50.0%"), (2, 2, "0.0%"), (4, 0, "+100%"), (0, 0, "0%")],
)
def test_growth_rate(this_week, last_week, expected):
    assert SubscriberCounts(1, 0, this_week, last_week).growth_rate == expected


def test_counts_to_dict():
    data = SubscriberService(InMemorySubscribers()).counts().to_dict()

    assert data["total"] == 10
    assert data["newThisWeek"] == 3
    assert data["newLastWeek"] == 2
    assert data["growthRate"] == "+50.0%"


def test_subscribe_active_email_is_conflict():
    repo = InMemorySubscribers([{"id": "1", "email": "a@x.com", "status": "active"}])
    with pytest.raises(ConflictError):
        SubscriberService(repo).subscribe({"email": "A@x.com"})


def test_subscribe_reactivates_unsubscribed():
    repo = InMemorySubscribers([{"id": "1", "email": "a@x.com", "status": "unsubscribed", "unsubscribed_at": "x"}])
    result = SubscriberService(repo).subscribe({"email": "a@x.com"})

    assert result["message"] == "Subscription reactivated successfully"
    assert repo.rows["a@x.com"]["status"] == "active"
    assert repo.rows["a@x.com"]["unsubscribed_at"] is None


def test_subscribe_new_defaults_source():
    result = SubscriberService(InMemorySubscribers()).subscribe({"email": "b@x.com", "firstName": "B"})

    assert result["data"]["source"] == "website"
    assert result["data"]["first_name"] == "B"


def test_list_subscribers_sanitizes_sort_and_paginates():
    repo = InMemorySubscribers([{"id": str(i), "email": f"{i}@x.com"} for i in range(3)])
    result = SubscriberService(repo).list_subscribers(limit=2, sort_by="password", sort_order="asc")

    assert repo.last_search["sort_by"] == "created_at"
    assert repo.last_search["descending"] is False
    assert result["pagination"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}
