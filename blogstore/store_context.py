import traceback
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import wraps
from typing import Any

from blogstore.store import ContentStore
from blogstore.utils.logging import correlation_scope, get_logger

logger = get_logger("store")

WRITE_PREFIXES = ("INSERT", "UPDATE", "DELETE")

# Store bound to the current session (only one per context)
_current_store: ContextVar[ContentStore | None] = ContextVar(
    "current_store", default=None
)


@dataclass
class QueryLog:
    """One store operation as rendered by DataOperations"""

    query: str
    params: list[Any]
    store: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    stack_trace: str | None = None

    @property
    def is_write(self) -> bool:
        return self.query.startswith(WRITE_PREFIXES)


@dataclass
class QueryTracker:
    """Collects the operations run while it is bound to the context"""

    queries: list[QueryLog] = field(default_factory=list)

    def log_query(
        self, query: str, params: list[Any], store: str, stack_trace: str | None = None
    ):
        self.queries.append(
            QueryLog(query=query, params=params, store=store, stack_trace=stack_trace)
        )

    def get_queries(self) -> list[QueryLog]:
        return self.queries.copy()

    def writes(self) -> list[QueryLog]:
        """Only the operations that changed a table"""
        return [log for log in self.queries if log.is_write]

    def clear(self):
        self.queries.clear()

    def count(self) -> int:
        return len(self.queries)


_query_tracker: ContextVar[QueryTracker | None] = ContextVar(
    "query_tracker", default=None
)


class StoreManager:
    """Binds content stores to the current async context"""

    @classmethod
    def get_current_store(cls) -> ContentStore | None:
        """Get the store of the active session from context"""
        return _current_store.get()

    @classmethod
    def get_query_tracker(cls) -> QueryTracker | None:
        return _query_tracker.get()

    @classmethod
    def log_query(cls, query: str, params: list[Any]):
        """Log an operation to the module logger and the current query tracker"""
        logger.debug("%s %r", query, params)
        tracker = _query_tracker.get()
        if tracker is None:
            return
        store = _current_store.get()
        # Skip this frame and the DataOperations frame
        stack_trace = "".join(traceback.format_list(traceback.extract_stack()[:-2]))
        tracker.log_query(query, params, store.name if store else "", stack_trace)

    @classmethod
    @asynccontextmanager
    async def session(cls, store: ContentStore, track_queries: bool = False):
        """Context manager giving the current task exclusive use of a store.

        Behavior:
        - If called within an existing session on the same store, the outer session is reused.
        - Otherwise the store lock is acquired, so writes (including view-count increments)
          never interleave and every read sees a consistent snapshot.
        - Log records emitted inside the session share one correlation id.
        - The lock is always released when the context exits, whether it exits normally
          or due to an exception. Nothing is rolled back.

        Args:
            store: The content store to work on
            track_queries: Whether to collect the session's operations in a QueryTracker
        """
        if _current_store.get() is store:
            yield store
            return

        async with store.lock:
            store_token = _current_store.set(store)
            tracker_token = None
            if track_queries and _query_tracker.get() is None:
                tracker_token = _query_tracker.set(QueryTracker())

            try:
                with correlation_scope():
                    yield store
            finally:
                _current_store.reset(store_token)
                if tracker_token:
                    _query_tracker.reset(tracker_token)

    @classmethod
    @asynccontextmanager
    async def track_queries(cls):
        """Collect operations run inside the block.

        async with StoreManager.session(store):
            async with StoreManager.track_queries() as tracker:
                await post_repo.find_by_slug(slug)
                queries = tracker.get_queries()

        A tracker already bound by an outer block or session is shared.
        """
        current_tracker = _query_tracker.get()
        if current_tracker is not None:
            yield current_tracker
            return

        tracker = QueryTracker()
        token = _query_tracker.set(tracker)
        try:
            yield tracker
        finally:
            _query_tracker.reset(token)


def in_session(query_logs: bool = False):
    """Decorator to run an async method inside a session on ``self.store``.

    Args:
        query_logs: Whether to enable query tracking for this session

    Example:
        class Service:
            def __init__(self, store):
                self.store = store

            @in_session(query_logs=True)
            async def create_user(self, user_data):
                user = await user_repo.create(user_data)
                tracker = StoreManager.get_query_tracker()
                if tracker:
                    print(f"Executed {tracker.count()} operations")
                return user
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            async with StoreManager.session(self.store, track_queries=query_logs):
                return await func(self, *args, **kwargs)

        return wrapper

    return decorator
