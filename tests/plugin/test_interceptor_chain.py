from explainshadow.executor import RowBounds
from explainshadow.mapping import CommandType, MappedStatement
from explainshadow.plugin import Interceptor, InterceptorChain, Invocation, OperationKind


class RecordingInterceptor(Interceptor):
    def __init__(self, name, events):
        self.name = name
        self.events = events

    def intercept(self, invocation):
        self.events.append((self.name, "before", invocation.kind))
        result = invocation.proceed()
        self.events.append((self.name, "after", invocation.kind))
        return result


class StubExecutor:
    def __init__(self):
        self.calls = []
        self.transaction = "shared-transaction"

    def query(self, statement, parameter, row_bounds, result_handler):
        self.calls.append(("query", parameter, row_bounds))
        return [{"id": parameter}]

    def query_with_cache_key(self, statement, parameter, row_bounds, result_handler, cache_key, bound_sql):
        self.calls.append(("query_with_cache_key", cache_key))
        return []

    def update(self, statement, parameter):
        self.calls.append(("update", parameter))
        return 3

    def commit(self):
        self.calls.append(("commit",))


def statement():
    return MappedStatement(id="users.select", sql="SELECT 1", command_type=CommandType.SELECT)


def test_last_added_interceptor_runs_outermost():
    events = []
    chain = InterceptorChain()
    chain.add_interceptor(RecordingInterceptor("inner", events))
    chain.add_interceptor(RecordingInterceptor("outer", events))
    executor = chain.plugin_all(StubExecutor())

    assert executor.query(statement(), 5) == [{"id": 5}]
    assert events == [
        ("outer", "before", OperationKind.QUERY),
        ("inner", "before", OperationKind.QUERY),
        ("inner", "after", OperationKind.QUERY),
        ("outer", "after", OperationKind.QUERY),
    ]


def test_wrapped_operations_route_each_kind():
    events = []
    chain = InterceptorChain()
    chain.add_interceptor(RecordingInterceptor("only", events))
    target = StubExecutor()
    executor = chain.plugin_all(target)

    executor.query(statement(), 1)
    executor.query_with_cache_key(statement(), 1, RowBounds.DEFAULT, None, "key", None)
    assert executor.update(statement(), {"id": 1}) == 3

    kinds = [kind for _, phase, kind in events if phase == "before"]
    assert kinds == [OperationKind.QUERY, OperationKind.QUERY_WITH_CACHE_KEY, OperationKind.UPDATE]
    assert target.calls[0] == ("query", 1, RowBounds.DEFAULT)


def test_non_intercepted_members_are_delegated():
    chain = InterceptorChain()
    chain.add_interceptor(RecordingInterceptor("only", []))
    target = StubExecutor()
    executor = chain.plugin_all(target)

    executor.commit()
    assert executor.transaction == "shared-transaction"
    assert target.calls == [("commit",)]


def test_empty_chain_returns_target_unchanged():
    target = StubExecutor()
    assert InterceptorChain().plugin_all(target) is target


def test_invocation_exposes_statement_and_parameter():
    stmt = statement()
    invocation = Invocation(StubExecutor(), OperationKind.UPDATE, (stmt, {"id": 9}))
    assert invocation.statement is stmt
    assert invocation.parameter == {"id": 9}
    assert invocation.proceed() == 3
