"""
Unit tests for locks.py
"""

import logging
from unittest import mock

import pytest

from superdump.errors import QueryExecutionError
from superdump.locks import LockCoordinator


class TestLockCoordinator:
    """Tests for LockCoordinator class."""

    @pytest.fixture
    def mock_connection(self):
        return mock.MagicMock()

    def test_acquire_locks_then_flushes(self, mock_connection):
        """Test READ lock followed by FLUSH against the database."""
        locks = LockCoordinator(mock_connection, enabled=True)
        assert locks.acquire("users") is True

        assert mock_connection.execute.call_args_list == [
            mock.call("LOCK TABLES `users` READ"),
            mock.call("FLUSH TABLES `users`"),
        ]
        assert locks.locked_table == "users"

    def test_release_unlocks(self, mock_connection):
        locks = LockCoordinator(mock_connection, enabled=True)
        locks.acquire("users")
        mock_connection.reset_mock()

        locks.release()

        mock_connection.execute.assert_called_once_with("UNLOCK TABLES")
        assert locks.locked_table is None

    def test_release_without_lock_is_noop(self, mock_connection):
        LockCoordinator(mock_connection, enabled=True).release()
        mock_connection.execute.assert_not_called()

    def test_disabled_does_nothing(self, mock_connection):
        """Test that no statement is sent when locking is disabled."""
        locks = LockCoordinator(mock_connection, enabled=False)
        assert locks.acquire("users") is False
        locks.release()
        mock_connection.execute.assert_not_called()

    def test_flush_failure_ignored(self, mock_connection, caplog):
        """Test that a failing FLUSH is logged and the lock kept."""
        caplog.set_level(logging.WARNING)

        def execute(query):
            if query.startswith("FLUSH"):
                raise QueryExecutionError(query, Exception("no privilege"))
            return 0

        mock_connection.execute.side_effect = execute
        locks = LockCoordinator(mock_connection, enabled=True)

        assert locks.acquire("users") is True
        assert locks.locked_table == "users"
        assert "Flushing table 'users' failed" in caplog.text

    def test_lock_failure_propagates(self, mock_connection):
        """Test that a failing READ lock aborts."""
        mock_connection.execute.side_effect = QueryExecutionError("LOCK TABLES `users` READ")
        locks = LockCoordinator(mock_connection, enabled=True)

        with pytest.raises(QueryExecutionError):
            locks.acquire("users")
        assert locks.locked_table is None

    def test_replay_lock_statements(self, writer, buffer):
        """Test the WRITE lock and unlock lines written to the script."""
        LockCoordinator.write_lock_statement(writer, "users")
        LockCoordinator.write_unlock_statement(writer)
        assert buffer.getvalue() == b"LOCK TABLES `users` WRITE;\nUNLOCK TABLES;\n"
