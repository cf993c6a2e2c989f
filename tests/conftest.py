"""
pytest configuration and shared fixtures.
"""
import pytest
import sqlite3
import sys
import os

# Add the root directory to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unittest.mock import MagicMock
from oracle_client import OracleClient


@pytest.fixture(scope='function')
def db_path(tmp_path):
    """SQLite database file with a small EMPLOYEES table."""
    path = tmp_path / 'test.db'
    conn = sqlite3.connect(str(path))
    conn.execute('CREATE TABLE EMPLOYEES (ID INTEGER PRIMARY KEY, NAME TEXT, SALARY REAL)')
    conn.executemany(
        'INSERT INTO EMPLOYEES (ID, NAME, SALARY) VALUES (?, ?, ?)',
        [(1, 'Alice', 1000.0), (2, 'Bob', 1500.0), (5, 'Carol', None)]
    )
    conn.commit()
    conn.close()
    return str(path)


@pytest.fixture(scope='function')
def client(db_path):
    """Client on the SQLite database."""
    client = OracleClient('scott', 'tiger', db_path, driver='sqlite')
    yield client
    client.close()


@pytest.fixture
def oracle_cursor():
    """oracledb cursor mock for a two column query."""
    cursor = MagicMock()
    cursor.bindnames.return_value = ['ID']
    cursor.description = [('ID',), ('NAME',)]
    cursor.fetchall.return_value = [(1, 'Alice'), (2, 'Bob')]
    cursor.fetchone.side_effect = [(1, 'Alice'), (2, 'Bob'), None]
    cursor.rowcount = 1
    return cursor


@pytest.fixture
def oracle_connection(oracle_cursor):
    conn = MagicMock()
    conn.cursor.return_value = oracle_cursor
    return conn
