"""Tests for the host-facing ProblemStore."""

import json
import logging

import pytest

from docdoctor.errors import (
    MalformedDocumentError, NotFoundError, NotInitializedError, OpenError,
    WriteError,
)
from docdoctor.store import FAILURE, SUCCESS, ProblemStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "problems.db")


@pytest.fixture
def store(db_path):
    s = ProblemStore()
    assert s.open(db_path) == SUCCESS
    yield s
    s.close()


def _doc(**fields) -> str:
    return json.dumps(fields)


def _listing(store: ProblemStore) -> list[dict]:
    text = store.list_all()
    assert text is not None
    return json.loads(text)


class TestOpenClose:
    def test_open_failure_sentinel(self, tmp_path):
        s = ProblemStore()
        assert s.open(str(tmp_path)) == FAILURE
        assert not s.is_open
        assert isinstance(s.last_error, OpenError)

    def test_open_null_byte_path(self, tmp_path):
        s = ProblemStore()
        assert s.open(str(tmp_path / "a\x00b.db")) == FAILURE
        assert isinstance(s.last_error, OpenError)
        assert not s.is_open

    def test_open_non_string_path(self):
        s = ProblemStore()
        assert s.open(None) == FAILURE
        assert isinstance(s.last_error, OpenError)
        assert not s.is_open

    def test_double_open_is_reset_not_error(self, store: ProblemStore, db_path):
        store.insert(_doc(file_path="a.c", function_name="f"))
        assert store.open(db_path) == SUCCESS
        assert len(_listing(store)) == 1

    def test_close_without_open(self):
        ProblemStore().close()

    def test_context_manager(self, db_path):
        with ProblemStore() as s:
            s.open(db_path)
            assert s.is_open
        assert not s.is_open


class TestNotInitialized:
    def test_all_operations_fail(self):
        s = ProblemStore()
        assert s.insert(_doc(function_name="f")) == FAILURE
        assert isinstance(s.last_error, NotInitializedError)
        assert s.list_all() is None
        assert s.update_status(1, 1) == FAILURE
        assert s.clear_all() == FAILURE
        assert isinstance(s.last_error, NotInitializedError)

    def test_after_close_no_mutation(self, store: ProblemStore, db_path):
        store.insert(_doc(function_name="f"))
        store.close()
        assert store.insert(_doc(function_name="g")) == FAILURE
        assert store.clear_all() == FAILURE
        store.open(db_path)
        assert [p["function_name"] for p in _listing(store)] == ["f"]

    def test_not_initialized_checked_before_parse(self):
        s = ProblemStore()
        assert s.insert("not json") == FAILURE
        assert isinstance(s.last_error, NotInitializedError)


class TestInsert:
    def test_returns_id_and_round_trips(self, store: ProblemStore):
        doc = dict(
            problem_type=1, file_path="src/utils.c",
            function_signature="int add(int a, int b)", function_name="add",
            line_number=25, column_number=5,
            problem_description='缺少参数 "a" 的说明（@param a）',
            function_snippet="int add(int a, int b) { return a + b; }",
            check_timestamp="2025-12-22T22:00:00.000Z", status=0,
        )
        pid = store.insert(json.dumps(doc))
        assert pid >= 1
        [record] = _listing(store)
        assert record == {"id": pid, **doc}

    def test_defaults_for_omitted_fields(self, store: ProblemStore):
        pid = store.insert(_doc(file_path="a.c", function_name="f"))
        [record] = _listing(store)
        assert record == {
            "id": pid, "problem_type": 0, "file_path": "a.c",
            "function_signature": "", "function_name": "f",
            "line_number": 1, "column_number": 1, "problem_description": "",
            "function_snippet": "", "check_timestamp": "", "status": 0,
        }

    def test_malformed_document(self, store: ProblemStore):
        assert store.insert("{not json") == FAILURE
        assert isinstance(store.last_error, MalformedDocumentError)
        assert _listing(store) == []

    def test_unencodable_text_is_write_failure(self, store: ProblemStore):
        assert store.insert('{"file_path": "\\ud800", "function_name": "f"}') == FAILURE
        assert isinstance(store.last_error, WriteError)
        assert _listing(store) == []

    def test_success_clears_last_error(self, store: ProblemStore):
        store.insert("{")
        store.insert(_doc(function_name="f"))
        assert store.last_error is None

    def test_engine_rejection(self, store: ProblemStore):
        assert store.insert(_doc(line_number=2 ** 70)) == FAILURE
        assert _listing(store) == []


class TestListAll:
    def test_empty_store_is_empty_array(self, store: ProblemStore):
        assert store.list_all() == "[]"

    def test_snapshot_holds_last_listing(self, store: ProblemStore):
        assert store.snapshot is None
        text = store.list_all()
        assert store.snapshot == text

    def test_snapshot_unchanged_by_other_operations(self, store: ProblemStore):
        store.insert(_doc(function_name="f"))
        text = store.list_all()
        store.insert(_doc(function_name="g"))
        store.clear_all()
        assert store.snapshot == text

    def test_failed_listing_keeps_snapshot(self, store: ProblemStore):
        store.insert(_doc(function_name="f"))
        text = store.list_all()
        store.close()
        assert store.list_all() is None
        assert store.snapshot == text

    def test_order_open_first_newest_first(self, store: ProblemStore):
        ids = [store.insert(_doc(function_name=n, status=s))
               for n, s in [("a", 1), ("b", 0), ("c", 1), ("d", 0)]]
        records = _listing(store)
        assert [r["id"] for r in records] == [ids[3], ids[1], ids[2], ids[0]]
        for earlier, later in zip(records, records[1:]):
            assert (earlier["status"], -earlier["id"]) < (later["status"], -later["id"])


class TestUpdateStatus:
    def test_changes_only_target(self, store: ProblemStore):
        a = store.insert(_doc(function_name="a"))
        b = store.insert(_doc(function_name="b"))
        before = {r["id"]: r for r in _listing(store)}
        assert store.update_status(a, 1) == SUCCESS
        after = {r["id"]: r for r in _listing(store)}
        assert after[a] == {**before[a], "status": 1}
        assert after[b] == before[b]

    def test_missing_id(self, store: ProblemStore):
        store.insert(_doc(function_name="a"))
        before = _listing(store)
        assert store.update_status(12345, 1) == FAILURE
        assert isinstance(store.last_error, NotFoundError)
        assert _listing(store) == before

    def test_status_not_range_checked(self, store: ProblemStore):
        pid = store.insert(_doc(function_name="a"))
        assert store.update_status(pid, 7) == SUCCESS
        assert _listing(store)[0]["status"] == 7


class TestClearAll:
    def test_then_list_is_empty(self, store: ProblemStore):
        store.insert(_doc(function_name="a"))
        store.insert(_doc(function_name="b"))
        assert store.clear_all() == SUCCESS
        assert _listing(store) == []

    def test_on_empty_store(self, store: ProblemStore):
        assert store.clear_all() == SUCCESS


class TestReplaceAll:
    def test_replaces_previous_rows(self, store: ProblemStore):
        store.insert(_doc(function_name="old"))
        result = store.replace_all([_doc(function_name="f"), _doc(function_name="g")])
        assert result.inserted == 2
        assert result.ok
        assert [r["function_name"] for r in _listing(store)] == ["g", "f"]

    def test_bad_documents_counted(self, store: ProblemStore):
        result = store.replace_all([_doc(function_name="f"), "garbage", "[]"])
        assert result.inserted == 1
        assert result.failed == 2
        assert not result.ok

    def test_not_initialized(self):
        result = ProblemStore().replace_all([_doc(function_name="f")])
        assert result.failed == 1


def test_walkthrough(store: ProblemStore):
    first = store.insert(_doc(file_path="a.c", function_name="f", status=0))
    second = store.insert(_doc(file_path="b.c", function_name="g", status=0))
    assert [r["id"] for r in _listing(store)] == [second, first]

    assert store.update_status(first, 1) == SUCCESS
    records = _listing(store)
    assert [r["id"] for r in records] == [second, first]
    assert records[1]["status"] == 1


def test_failures_are_logged(store: ProblemStore, caplog):
    caplog.set_level(logging.INFO, logger="docdoctor")
    store.update_status(999, 1)
    assert "problem not found: 999" in caplog.text
