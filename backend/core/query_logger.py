# backend/core/query_logger.py

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.engine import Engine

from core.config import get_settings

logger = logging.getLogger("sqlalchemy.engine")
query_logger = logging.getLogger("query_performance")

settings = get_settings()


class QueryLogger:
    """Collects per-process SQL statistics and flags slow statements."""

    def __init__(self):
        self.enabled = not settings.is_production or settings.debug
        self.slow_query_threshold = settings.slow_query_threshold_seconds
        self.query_stats: Dict[str, Any] = {}
        self.reset_stats()

    def log_query_stats(self):
        """Log accumulated query statistics"""
        if not self.enabled:
            return

        total = self.query_stats["total_queries"]
        query_logger.info(
            f"Query statistics: total={total} "
            f"slow={self.query_stats['slow_queries']} "
            f"time={self.query_stats['total_time']:.3f}s "
            f"avg={self.query_stats['total_time'] / max(total, 1):.3f}s "
            f"by_table={self.query_stats['queries_by_table']}"
        )

    def reset_stats(self):
        """Reset query statistics"""
        self.query_stats = {
            "total_queries": 0,
            "slow_queries": 0,
            "total_time": 0.0,
            "queries_by_table": {},
        }


# Singleton instance
query_logger_instance = QueryLogger()


def setup_query_logging(engine: Engine):
    """
    Setup query logging for an SQLAlchemy engine

    Args:
        engine: SQLAlchemy engine instance
    """
    if not query_logger_instance.enabled:
        return

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())
        conn.info.setdefault("query_tables", []).append(
            extract_tables_from_query(statement)
        )

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = time.time() - conn.info["query_start_time"].pop(-1)
        tables = conn.info["query_tables"].pop(-1)

        stats = query_logger_instance.query_stats
        stats["total_queries"] += 1
        stats["total_time"] += total_time
        for table in tables:
            stats["queries_by_table"][table] = stats["queries_by_table"].get(table, 0) + 1

        if total_time > query_logger_instance.slow_query_threshold:
            stats["slow_queries"] += 1
            query_logger.warning(f"SLOW QUERY ({total_time:.3f}s): {statement[:200]}...")

        if settings.log_sql_queries:
            logger.debug("Query Complete in %.3fs", total_time)

    if engine.url.get_backend_name() == "sqlite":

        @event.listens_for(engine, "connect")
        def setup_sqlite_pragma(dbapi_conn, connection_record):
            """Enable WAL journaling on new SQLite connections"""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode = WAL")
            cursor.close()


def extract_tables_from_query(query: str) -> list:
    """
    Extract table names from SQL query (simple implementation)

    Args:
        query: SQL query string

    Returns:
        List of table names found in query
    """
    query_upper = query.upper()
    tables = []

    for pattern in ("FROM ", "JOIN ", "UPDATE ", "INSERT INTO ", "DELETE FROM "):
        pos = 0
        while True:
            pos = query_upper.find(pattern, pos)
            if pos == -1:
                break

            start = pos + len(pattern)
            end = start
            while end < len(query) and query[end] not in " ,();\n":
                end += 1

            if end > start:
                table_name = query[start:end].strip().lower()
                if "." in table_name:
                    table_name = table_name.split(".")[-1]
                table_name = table_name.strip("\"'`")

                if table_name and not table_name.startswith("("):
                    tables.append(table_name)

            pos = end

    return list(set(tables))


@contextmanager
def log_query_performance(operation_name: str):
    """
    Context manager to log the number of statements an operation issued

    Example:
        with log_query_performance("dashboard_metrics"):
            rows = store.list_orders()
    """
    if not query_logger_instance.enabled:
        yield
        return

    start_queries = query_logger_instance.query_stats["total_queries"]
    start_time = time.time()

    try:
        yield
    finally:
        elapsed_time = time.time() - start_time
        query_count = query_logger_instance.query_stats["total_queries"] - start_queries
        query_logger.debug(
            f"Operation '{operation_name}': {query_count} queries in {elapsed_time:.3f}s"
        )
