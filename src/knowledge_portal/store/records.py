"""
JSON file record store for user accounts and knowledge-base queries.

The store keeps two flat collections, ``users.json`` and ``queries.json``,
each a JSON array of camelCase records. Both are loaded into memory once at
construction and every mutation is written through to disk before it
becomes visible.

Usage:
    from knowledge_portal.store import RecordStore

    store = RecordStore()
    query = store.append_query(
        {"title": "VPN drops", "details": "...", "answer": "...", "topic": "technical"},
        author_employee_id="E2301",
    )
    queries = store.list_queries()
"""

import json
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from knowledge_portal.config import (
    QUERIES_FILENAME,
    USERS_FILENAME,
    get_settings,
    parse_topic,
)
from knowledge_portal.core import (
    Query,
    StorageError,
    Topic,
    User,
    ValidationError,
    get_logger,
)
from knowledge_portal.search.engine import sort_newest_first
from knowledge_portal.store.fixtures import DEMO_USERS, demo_queries

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", User, Query)

QUERY_TEXT_FIELDS = ("title", "details", "answer")


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _next_id(records: Iterable[Any]) -> int:
    """Return max existing id + 1, or 1 for an empty collection."""
    return max((r.id for r in records), default=0) + 1


class RecordStore:
    """
    Durable store for users and queries backed by two JSON files.

    Mutations run under a single re-entrant lock covering validate,
    assign id, persist, and publish. Each collection is held as an
    immutable tuple that is only replaced after the new file has been
    atomically renamed into place, so:

        - a failed write raises ``StorageError`` and leaves memory untouched
        - readers take a snapshot without locking and never see a
          half-applied mutation

    When ``seed`` is enabled and a collection is empty on first load, it is
    filled with the demo fixtures from ``store.fixtures`` and persisted.

    Example:
        >>> store = RecordStore(data_dir="/tmp/kb", seed=False)
        >>> store.create_user("E9001", "secret").id
        1
    """

    def __init__(
        self,
        data_dir: Optional[str] = None,
        seed: Optional[bool] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialise the store and load (or seed) both collections.

        Args:
            data_dir: Directory holding users.json and queries.json. If None,
                      uses ``settings.store.data_dir``.
            seed: Seed demo fixtures into empty collections. If None, uses
                  ``settings.store.seed_demo_data``.
            clock: Returns the current timezone-aware time. Used for new
                   query dates and relative seed dates.

        Raises:
            StorageError: If the directory cannot be created or an existing
                          file cannot be read or parsed.
        """
        settings = get_settings()
        self._data_dir = Path(data_dir or settings.store.data_dir)
        self._seed = settings.store.seed_demo_data if seed is None else seed
        self._clock = clock or _local_now

        self._users_path = self._data_dir / USERS_FILENAME
        self._queries_path = self._data_dir / QUERIES_FILENAME

        self._lock = threading.RLock()
        self._users: tuple[User, ...] = ()
        self._queries: tuple[Query, ...] = ()

        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Cannot create data directory: {self._data_dir}",
                details=str(e),
            ) from e

        self._load()

        logger.debug(
            "RecordStore initialised: %s (%d users, %d queries)",
            self._data_dir,
            len(self._users),
            len(self._queries),
        )

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    # ------------------------------------------------------------------
    # Loading and persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        """Read both collections, seeding empty ones when enabled."""
        with self._lock:
            users = self._read_collection(self._users_path, User.from_record)
            queries = self._read_collection(self._queries_path, Query.from_record)

            if self._seed and not users:
                users = list(DEMO_USERS)
                self._write_collection(self._users_path, users)
                logger.info("Seeded %d demo users into %s", len(users), self._users_path)

            if self._seed and not queries:
                # Only fixtures whose author is a registered user
                known = {u.employee_id for u in users}
                fixtures = demo_queries(self._clock())
                queries = [q for q in fixtures if q.employee_id in known]
                skipped = len(fixtures) - len(queries)
                if skipped:
                    logger.warning(
                        "Skipped %d demo queries whose authors are not registered",
                        skipped,
                    )
                if queries:
                    self._write_collection(self._queries_path, queries)
                    logger.info(
                        "Seeded %d demo queries into %s",
                        len(queries),
                        self._queries_path,
                    )

            self._users = tuple(users)
            self._queries = tuple(queries)

    @staticmethod
    def _read_collection(
        path: Path,
        factory: Callable[[dict[str, Any]], RecordT],
    ) -> list[RecordT]:
        """
        Parse one JSON array file into records.

        A missing or blank file is an empty collection.

        Raises:
            StorageError: If the file cannot be read, is not a JSON array,
                          or holds a malformed record.
        """
        if not path.exists():
            return []

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {path.name}", details=str(e)) from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON in {path.name}", details=str(e)) from e

        if not isinstance(data, list):
            raise StorageError(
                f"Malformed JSON in {path.name}",
                details=f"expected an array, got {type(data).__name__}",
            )

        try:
            return [factory(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(
                f"Malformed record in {path.name}",
                details=f"{type(e).__name__}: {e}",
            ) from e

    def _write_collection(self, path: Path, records: Iterable[Any]) -> None:
        """
        Atomically replace ``path`` with the serialised records.

        Writes to a temporary file in the same directory, fsyncs it, then
        ``os.replace()``s it over the target. On failure the temporary file
        is removed and the original file is untouched.

        Raises:
            StorageError: If any step of the write fails.
        """
        payload = json.dumps([r.to_record() for r in records], indent=2)

        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{path.stem}-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                    tmp_file.write(payload)
                    tmp_file.flush()
                    os.fsync(tmp_file.fileno())
                os.replace(tmp_path, path)
            except BaseException:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path.name}", details=str(e)) from e

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def list_users(self) -> list[User]:
        """Return all users in id order."""
        return list(self._users)

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with ``user_id``, or None."""
        return next((u for u in self._users if u.id == user_id), None)

    def find_user_by_employee_id(self, employee_id: str) -> Optional[User]:
        """Return the user whose employee ID matches exactly, or None."""
        return next((u for u in self._users if u.employee_id == employee_id), None)

    def create_user(self, employee_id: str, password: str) -> User:
        """
        Register a new employee account.

        Args:
            employee_id: Unique login name. Surrounding whitespace is removed.
            password: Plaintext password, stored as given.

        Returns:
            The persisted User.

        Raises:
            ValidationError: If either field is blank or the employee ID
                             is already taken.
            StorageError: If users.json cannot be written.
        """
        employee_id = (employee_id or "").strip()
        if not employee_id:
            raise ValidationError("employeeId is required", field="employeeId")
        if not password:
            raise ValidationError("password is required", field="password")

        with self._lock:
            if self.find_user_by_employee_id(employee_id) is not None:
                raise ValidationError(
                    f"Employee ID already registered: {employee_id}",
                    field="employeeId",
                )

            user = User(
                id=_next_id(self._users),
                employee_id=employee_id,
                password=password,
            )
            updated = self._users + (user,)
            self._write_collection(self._users_path, updated)
            self._users = updated

        logger.info("Created user %s (id=%d)", user.employee_id, user.id)
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_queries(self) -> list[Query]:
        """Return a snapshot of all queries in insertion order."""
        return list(self._queries)

    def find_query_by_id(self, query_id: int) -> Optional[Query]:
        """Return the query with ``query_id``, or None."""
        return next((q for q in self._queries if q.id == query_id), None)

    def list_employee_ids(self) -> list[str]:
        """
        Return the unique authors of stored queries.

        Ordered by first appearance when queries are sorted newest first.
        """
        seen: dict[str, None] = {}
        for query in sort_newest_first(self._queries):
            seen.setdefault(query.employee_id, None)
        return list(seen)

    @staticmethod
    def _validate_query_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
        """
        Check and normalise submitted query fields.

        Returns:
            Dict with stripped ``title``/``details``/``answer`` and a
            ``Topic`` under ``topic``.

        Raises:
            ValidationError: On the first missing, blank, or invalid field.
        """
        cleaned: dict[str, Any] = {}
        for name in QUERY_TEXT_FIELDS:
            value = fields.get(name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{name} is required", field=name)
            cleaned[name] = value.strip()

        topic = fields.get("topic")
        if isinstance(topic, Topic):
            cleaned["topic"] = topic
        elif isinstance(topic, str) and topic.strip():
            try:
                cleaned["topic"] = Topic(parse_topic(topic))
            except ValueError as e:
                raise ValidationError(str(e), field="topic") from e
        else:
            raise ValidationError("topic is required", field="topic")

        return cleaned

    def append_query(
        self,
        fields: Mapping[str, Any],
        author_employee_id: str,
    ) -> Query:
        """
        Append a new query authored by ``author_employee_id``.

        The id is max existing id + 1 (1 for an empty store) and the date is
        the store clock's current time. Any ``id``, ``date`` or
        ``employeeId`` in ``fields`` is ignored.

        Args:
            fields: Mapping with ``title``, ``details``, ``answer``, ``topic``.
            author_employee_id: Employee ID of an existing user.

        Returns:
            The persisted Query.

        Raises:
            ValidationError: If a field is missing/blank, the topic is not
                             recognised, or the author does not exist.
            StorageError: If queries.json cannot be written.
        """
        cleaned = self._validate_query_fields(fields)

        with self._lock:
            if self.find_user_by_employee_id(author_employee_id) is None:
                raise ValidationError(
                    f"Unknown employee ID: {author_employee_id}",
                    field="employeeId",
                )

            query = Query(
                id=_next_id(self._queries),
                title=cleaned["title"],
                details=cleaned["details"],
                answer=cleaned["answer"],
                topic=cleaned["topic"],
                employee_id=author_employee_id,
                date=self._clock(),
            )
            updated = self._queries + (query,)
            self._write_collection(self._queries_path, updated)
            self._queries = updated

        logger.info(
            "Appended query %d (%s) for %s",
            query.id,
            query.topic.value,
            query.employee_id,
        )
        return query
