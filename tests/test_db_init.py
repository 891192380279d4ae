"""
Tests for emoclass.db.init_db.
"""
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError
from tenacity import wait_none

from emoclass.db.init_db import init_db


class TestInitDb:

    def test_creates_tables(self):
        engine = create_engine("sqlite://")
        init_db(engine)
        assert set(inspect(engine).get_table_names()) == {"classes", "students", "emotion_checkins"}

    def test_retries_until_database_is_up(self):
        """Test a transient OperationalError is retried."""
        engine = create_engine("sqlite://")
        err = OperationalError("CREATE TABLE", {}, Exception("starting up"))
        with patch("emoclass.db.init_db.Base.metadata.create_all", side_effect=[err, None]) as create_all:
            init_db.retry_with(wait=wait_none())(engine)
        assert create_all.call_count == 2

    def test_gives_up_after_three_attempts(self):
        engine = create_engine("sqlite://")
        err = OperationalError("CREATE TABLE", {}, Exception("down"))
        with patch("emoclass.db.init_db.Base.metadata.create_all", side_effect=err) as create_all:
            with pytest.raises(OperationalError):
                init_db.retry_with(wait=wait_none())(engine)
        assert create_all.call_count == 3
