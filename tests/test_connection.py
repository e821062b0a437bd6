import logging

import pytest

from db import connection
from utils import logger as ledger_logger
from utils.exceptions import PersistenceError


def test_borrowing_without_postgres_backend_raises():
    connection.close_pool()
    with pytest.raises(PersistenceError):
        connection.get_connection()


def test_close_pool_is_a_no_op_on_local_backend():
    connection.close_pool()
    connection.close_pool()


@pytest.mark.parametrize("name, level", [
    ("DEBUG", logging.DEBUG),
    ("warning", logging.WARNING),
    (" error ", logging.ERROR),
    ("loud", logging.INFO),
])
def test_log_level_names(name, level):
    assert ledger_logger._resolve_level(name) == level
