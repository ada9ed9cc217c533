import logging

import pytest

from explainshadow.executor import CacheKey, ExecutorError, LocalCache, RowBounds
from explainshadow.mapping import CommandType
from explainshadow.session import Configuration


@pytest.fixture
def configuration(tmp_path):
    config = Configuration.from_dsn(f"sqlite:///{tmp_path / 'executor.db'}")
    config.add_statement(
        "numbers.create", "CREATE TABLE numbers (n INTEGER, secret TEXT)", CommandType.UPDATE
    )
    config.add_statement(
        "numbers.insert", "INSERT INTO numbers (n, secret) VALUES (#{n}, #{secret})", CommandType.INSERT
    )
    config.add_statement("numbers.all", "SELECT n FROM numbers ORDER BY n", CommandType.SELECT)
    return config


@pytest.fixture
def executor(configuration):
    executor = configuration.new_executor(configuration.new_transaction())
    executor.update(configuration.get_statement("numbers.create"), None)
    insert = configuration.get_statement("numbers.insert")
    for n in range(5):
        executor.update(insert, {"n": n, "secret": f"s{n}"})
    yield executor
    executor.close()


def test_update_returns_rowcount(configuration, executor):
    statement = configuration.get_statement("numbers.insert")
    assert executor.update(statement, {"n": 9, "secret": "x"}) == 1


def test_query_maps_rows_to_dicts_with_bounds(configuration, executor):
    statement = configuration.get_statement("numbers.all")
    assert executor.query(statement, None) == [{"n": n} for n in range(5)]
    assert executor.query(statement, None, RowBounds(offset=1, limit=2)) == [{"n": 1}, {"n": 2}]
    assert executor.query(statement, None, RowBounds(offset=10)) == []


def test_result_handler_receives_rows(configuration, executor):
    seen = []
    result = executor.query(configuration.get_statement("numbers.all"), None, RowBounds(limit=2), seen.append)
    assert result == []
    assert seen == [{"n": 0}, {"n": 1}]
    assert len(executor.local_cache) == 0


def test_cache_is_filled_and_cleared_by_update(configuration, executor):
    statement = configuration.get_statement("numbers.all")
    executor.query(statement, None)
    assert len(executor.local_cache) == 1
    executor.update(configuration.get_statement("numbers.insert"), {"n": 5, "secret": "y"})
    assert len(executor.local_cache) == 0
    assert len(executor.query(statement, None)) == 6


def test_cache_cleared_by_commit_and_rollback(configuration, executor):
    statement = configuration.get_statement("numbers.all")
    executor.query(statement, None)
    executor.commit()
    assert len(executor.local_cache) == 0
    executor.query(statement, None)
    executor.rollback()
    assert len(executor.local_cache) == 0


def test_closed_executor_raises(configuration, executor):
    executor.close()
    assert executor.closed
    with pytest.raises(ExecutorError):
        executor.query(configuration.get_statement("numbers.all"), None)
    with pytest.raises(ExecutorError):
        executor.transaction
    executor.close()


def test_trace_lines_redact_sensitive_parameters(configuration, executor, caplog):
    caplog.set_level(logging.DEBUG, logger="explainshadow.statements")
    executor.update(configuration.get_statement("numbers.insert"), {"n": 7, "secret": "hunter2"})
    messages = [record.getMessage() for record in caplog.records]
    assert "==>  Preparing: INSERT INTO numbers (n, secret) VALUES (?, ?)" in messages
    assert "==> Parameters: 7(int), ***(str)" in messages
    assert "<==    Updates: 1" in messages
    assert not any("hunter2" in message for message in messages)


def test_row_bounds_validation():
    with pytest.raises(ValueError):
        RowBounds(offset=-1)
    with pytest.raises(ValueError):
        RowBounds(limit=-1)
    assert RowBounds.DEFAULT == RowBounds()


def test_cache_key_depends_on_bounds_and_values():
    base = CacheKey.build("s", RowBounds.DEFAULT, "SELECT ?", (1,))
    assert base == CacheKey.build("s", RowBounds(), "SELECT ?", [1])
    assert base != CacheKey.build("s", RowBounds(limit=1), "SELECT ?", (1,))
    assert base != CacheKey.build("s", RowBounds.DEFAULT, "SELECT ?", (2,))


def test_local_cache_returns_copies():
    cache = LocalCache()
    key = CacheKey.build("s", RowBounds.DEFAULT, "SELECT 1", ())
    cache.put(key, [{"a": 1}])
    rows = cache.get(key)
    rows[0]["a"] = 2
    assert cache.get(key) == [{"a": 1}]
    cache.clear()
    assert cache.get(key) is None
