"""Tests for the JSON file record store.

Every test gets its own data directory (tmp_data_dir) and the shared
MutableClock, so query dates and seed dates are deterministic. Failure
injection patches ``os.replace`` inside the store module to simulate a
disk that refuses the final rename.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

import knowledge_portal.store.records as records_module
from knowledge_portal.core.exceptions import StorageError, ValidationError
from knowledge_portal.core.types import Topic
from knowledge_portal.store import DEMO_USERS, RecordStore
from knowledge_portal.store.fixtures import _one_month_before
from tests.helpers import query_fields


def _read_json(path: Path) -> list[dict]:
    return json.loads(path.read_text(encoding="utf-8"))


# -----------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------


class TestUsers:
    """User lookup and registration."""

    def test_empty_store(self, empty_store):
        assert empty_store.list_users() == []
        assert empty_store.find_user_by_employee_id("E2301") is None
        assert empty_store.find_user_by_id(1) is None

    def test_create_assigns_sequential_ids(self, empty_store):
        first = empty_store.create_user("E1000", "a")
        second = empty_store.create_user("E1001", "b")
        assert (first.id, second.id) == (1, 2)

    def test_create_persists(self, empty_store, tmp_data_dir, clock):
        empty_store.create_user("E1000", "secret")
        on_disk = _read_json(Path(tmp_data_dir) / "users.json")
        assert on_disk == [{"id": 1, "employeeId": "E1000", "password": "secret"}]

        reopened = RecordStore(data_dir=tmp_data_dir, seed=False, clock=clock)
        assert reopened.find_user_by_employee_id("E1000").password == "secret"

    def test_find_is_exact_match(self, store):
        assert store.find_user_by_employee_id("E2301").id == 1
        assert store.find_user_by_employee_id("e2301") is None
        assert store.find_user_by_id(2).employee_id == "E1856"

    def test_duplicate_rejected(self, store):
        with pytest.raises(ValidationError, match="already registered") as exc_info:
            store.create_user("E2301", "other")
        assert exc_info.value.field == "employeeId"
        assert len(store.list_users()) == 2

    @pytest.mark.parametrize(
        ("employee_id", "password", "field"),
        [("", "pw", "employeeId"), ("   ", "pw", "employeeId"), ("E9", "", "password")],
    )
    def test_blank_fields_rejected(self, empty_store, employee_id, password, field):
        with pytest.raises(ValidationError) as exc_info:
            empty_store.create_user(employee_id, password)
        assert exc_info.value.field == field

    def test_password_not_in_repr(self, store):
        assert "Welcome@5432109" not in repr(store.find_user_by_id(1))


# -----------------------------------------------------------------------
# Queries
# -----------------------------------------------------------------------


class TestAppendQuery:
    """append_query() validates, assigns id and date, and persists."""

    def test_first_id_is_one(self, store, fixed_now):
        query = store.append_query(query_fields(), author_employee_id="E2301")
        assert query.id == 1
        assert query.date == fixed_now
        assert query.employee_id == "E2301"
        assert query.topic is Topic.HARDWARE

    def test_ids_strictly_increase(self, store, clock):
        ids = []
        dates = []
        for _ in range(4):
            q = store.append_query(query_fields(), author_employee_id="E1856")
            ids.append(q.id)
            dates.append(q.date)
            clock.advance(timedelta(minutes=5))
        assert ids == [1, 2, 3, 4]
        assert dates == sorted(dates)
        assert dates[-1] - dates[0] == timedelta(minutes=15)

    def test_next_id_is_max_plus_one(self, tmp_data_dir, clock, store):
        queries_path = Path(tmp_data_dir) / "queries.json"
        queries_path.write_text(
            json.dumps(
                [
                    {**query_fields(), "id": 7, "employeeId": "E2301",
                     "date": "2024-04-01T10:00:00+00:00"},
                    {**query_fields(), "id": 2, "employeeId": "E2301",
                     "date": "2024-04-02T10:00:00+00:00"},
                ]
            ),
            encoding="utf-8",
        )
        reopened = RecordStore(data_dir=tmp_data_dir, seed=False, clock=clock)
        assert reopened.append_query(query_fields(), "E2301").id == 8

    def test_persisted_and_reloaded(self, store, tmp_data_dir, clock, fixed_now):
        created = store.append_query(query_fields(title="Badge not working"), "E2301")

        on_disk = _read_json(Path(tmp_data_dir) / "queries.json")
        assert on_disk[0]["title"] == "Badge not working"
        assert on_disk[0]["employeeId"] == "E2301"
        assert on_disk[0]["date"] == fixed_now.isoformat()

        reopened = RecordStore(data_dir=tmp_data_dir, seed=False, clock=clock)
        assert reopened.find_query_by_id(created.id) == created

    def test_caller_cannot_choose_id_date_or_author(self, store, fixed_now):
        fields = query_fields(id="99", date="1999-01-01", employeeId="E1856")
        query = store.append_query(fields, author_employee_id="E2301")
        assert query.id == 1
        assert query.date == fixed_now
        assert query.employee_id == "E2301"

    def test_fields_are_stripped(self, store):
        query = store.append_query(query_fields(title="  Wi-Fi  "), "E2301")
        assert query.title == "Wi-Fi"

    def test_topic_case_insensitive(self, store):
        assert store.append_query(query_fields(topic=" HR "), "E2301").topic is Topic.HR

    def test_topic_enum_accepted(self, store):
        fields = {**query_fields(), "topic": Topic.SOFTWARE}
        assert store.append_query(fields, "E2301").topic is Topic.SOFTWARE

    @pytest.mark.parametrize("field", ["title", "details", "answer", "topic"])
    def test_missing_field(self, store, field):
        fields = query_fields()
        del fields[field]
        with pytest.raises(ValidationError, match=f"{field} is required") as exc_info:
            store.append_query(fields, "E2301")
        assert exc_info.value.field == field

    @pytest.mark.parametrize("field", ["title", "details", "answer"])
    def test_blank_field(self, store, field):
        with pytest.raises(ValidationError, match=f"{field} is required"):
            store.append_query(query_fields(**{field: "   "}), "E2301")

    def test_invalid_topic(self, store):
        with pytest.raises(ValidationError, match="Unsupported topic") as exc_info:
            store.append_query(query_fields(topic="gardening"), "E2301")
        assert exc_info.value.field == "topic"

    def test_unknown_author(self, store, tmp_data_dir):
        with pytest.raises(ValidationError, match="Unknown employee ID"):
            store.append_query(query_fields(), author_employee_id="E0000")
        assert store.list_queries() == []
        assert not (Path(tmp_data_dir) / "queries.json").exists()

    def test_concurrent_appends_get_unique_ids(self, store, tmp_data_dir):
        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(
                pool.map(lambda _: store.append_query(query_fields(), "E2301"), range(25))
            )
        assert sorted(q.id for q in created) == list(range(1, 26))
        assert len(_read_json(Path(tmp_data_dir) / "queries.json")) == 25


class TestListEmployeeIds:
    """Unique authors in newest-first order of appearance."""

    def test_empty(self, store):
        assert store.list_employee_ids() == []

    def test_seeded(self, seeded_store):
        assert seeded_store.list_employee_ids() == ["E1856", "E1406", "E2301"]


# -----------------------------------------------------------------------
# Failure handling
# -----------------------------------------------------------------------


class TestStorageFailures:
    """Failed writes raise StorageError and leave state untouched."""

    def _fail_replace(self, monkeypatch):
        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(records_module.os, "replace", boom)

    def test_append_is_all_or_nothing(self, store, tmp_data_dir, monkeypatch):
        store.append_query(query_fields(title="kept"), "E2301")
        queries_path = Path(tmp_data_dir) / "queries.json"
        before_disk = queries_path.read_text(encoding="utf-8")

        self._fail_replace(monkeypatch)
        with pytest.raises(StorageError, match="Failed to write queries.json"):
            store.append_query(query_fields(title="lost"), "E2301")

        assert [q.title for q in store.list_queries()] == ["kept"]
        assert queries_path.read_text(encoding="utf-8") == before_disk
        assert not [p for p in Path(tmp_data_dir).iterdir() if p.name.endswith(".tmp")]

    def test_failed_append_does_not_consume_id(self, store, monkeypatch):
        with monkeypatch.context() as m:
            m.setattr(records_module.os, "replace", self._raise_oserror)
            with pytest.raises(StorageError):
                store.append_query(query_fields(), "E2301")
        assert store.append_query(query_fields(), "E2301").id == 1

    def test_create_user_is_all_or_nothing(self, store, monkeypatch):
        self._fail_replace(monkeypatch)
        with pytest.raises(StorageError, match="users.json"):
            store.create_user("E7777", "pw")
        assert store.find_user_by_employee_id("E7777") is None

    @staticmethod
    def _raise_oserror(src, dst):
        raise OSError("read-only file system")

    def test_malformed_json(self, tmp_data_dir):
        Path(tmp_data_dir).mkdir(parents=True)
        (Path(tmp_data_dir) / "users.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="Malformed JSON in users.json"):
            RecordStore(data_dir=tmp_data_dir, seed=False)

    def test_non_array_json(self, tmp_data_dir):
        Path(tmp_data_dir).mkdir(parents=True)
        (Path(tmp_data_dir) / "queries.json").write_text('{"id": 1}', encoding="utf-8")
        with pytest.raises(StorageError, match="expected an array"):
            RecordStore(data_dir=tmp_data_dir, seed=False)

    def test_malformed_record(self, tmp_data_dir):
        Path(tmp_data_dir).mkdir(parents=True)
        (Path(tmp_data_dir) / "users.json").write_text(
            '[{"id": 1, "employeeId": "E1"}]', encoding="utf-8"
        )
        with pytest.raises(StorageError, match="Malformed record in users.json"):
            RecordStore(data_dir=tmp_data_dir, seed=False)

    def test_blank_file_is_empty(self, tmp_data_dir):
        Path(tmp_data_dir).mkdir(parents=True)
        (Path(tmp_data_dir) / "users.json").write_text("  \n", encoding="utf-8")
        assert RecordStore(data_dir=tmp_data_dir, seed=False).list_users() == []

    def test_data_dir_is_a_file(self, tmp_path):
        blocker = tmp_path / "data"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(StorageError, match="Cannot create data directory"):
            RecordStore(data_dir=str(blocker), seed=False)


# -----------------------------------------------------------------------
# Seeding
# -----------------------------------------------------------------------


class TestSeeding:
    """Demo fixtures fill empty collections only when seeding is enabled."""

    def test_seeds_users_and_queries(self, seeded_store, tmp_data_dir):
        assert [u.employee_id for u in seeded_store.list_users()] == [
            u.employee_id for u in DEMO_USERS
        ]
        assert [q.id for q in seeded_store.list_queries()] == [1, 2, 3, 4, 5]
        assert len(_read_json(Path(tmp_data_dir) / "users.json")) == 3
        assert len(_read_json(Path(tmp_data_dir) / "queries.json")) == 5

    def test_relative_seed_dates(self, seeded_store, fixed_now):
        assert seeded_store.find_query_by_id(2).date == fixed_now
        assert seeded_store.find_query_by_id(1).date == datetime(
            2024, 4, 2, 12, 0, tzinfo=timezone.utc
        )

    def test_seed_authors_exist(self, seeded_store):
        for query in seeded_store.list_queries():
            assert seeded_store.find_user_by_employee_id(query.employee_id) is not None

    def test_seed_skips_queries_of_unregistered_authors(self, tmp_data_dir, clock):
        data_dir = Path(tmp_data_dir)
        data_dir.mkdir(parents=True)
        (data_dir / "users.json").write_text(
            json.dumps([{"id": 1, "employeeId": "E9999", "password": "x"}]),
            encoding="utf-8",
        )
        store = RecordStore(data_dir=tmp_data_dir, seed=True, clock=clock)
        assert [u.employee_id for u in store.list_users()] == ["E9999"]
        assert store.list_queries() == []
        assert not (data_dir / "queries.json").exists()

    def test_seed_keeps_queries_of_registered_authors(self, tmp_data_dir, clock):
        data_dir = Path(tmp_data_dir)
        data_dir.mkdir(parents=True)
        (data_dir / "users.json").write_text(
            json.dumps([{"id": 1, "employeeId": "E1856", "password": "password"}]),
            encoding="utf-8",
        )
        store = RecordStore(data_dir=tmp_data_dir, seed=True, clock=clock)
        assert [q.id for q in store.list_queries()] == [2, 4]
        for query in store.list_queries():
            assert store.find_user_by_employee_id(query.employee_id) is not None

    def test_no_reseed_when_data_exists(self, seeded_store, tmp_data_dir, clock):
        seeded_store.append_query(query_fields(), "E2301")
        reopened = RecordStore(data_dir=tmp_data_dir, seed=True, clock=clock)
        assert len(reopened.list_queries()) == 6
        assert len(reopened.list_users()) == 3

    def test_no_seed_mode(self, empty_store, tmp_data_dir):
        assert empty_store.list_users() == []
        assert empty_store.list_queries() == []
        assert not (Path(tmp_data_dir) / "users.json").exists()

    def test_one_month_before_clamps(self):
        moment = datetime(2024, 3, 31, 8, 0, tzinfo=timezone.utc)
        assert _one_month_before(moment) == datetime(2024, 2, 29, 8, 0, tzinfo=timezone.utc)

    def test_one_month_before_january(self):
        moment = datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert _one_month_before(moment) == datetime(2023, 12, 15, tzinfo=timezone.utc)
