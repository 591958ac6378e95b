"""
Tests for the database package surface.
"""

import infrastructure.database as database


def test_exports_request_scoped_session_only():
    assert set(database.__all__) == {
        "Base",
        "engine",
        "async_session_maker",
        "get_db",
        "init_db",
        "close_db",
    }
    assert not hasattr(database, "get_db_context")
