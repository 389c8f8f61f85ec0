"""Integration test mapping real SQLite result sets.

Covers: DB-API cursor adaptation, naming strategies against column labels,
NULL handling, string-encoded dates and decimals, empty and non-query
results against an in-memory database.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated

import pytest
from pydantic import BaseModel

from row_mapper.core.enums import NamingStrategy
from row_mapper.core.exceptions import ConversionError
from row_mapper.core.row import ResultCursor
from row_mapper.mapping.builder import mapper_for
from row_mapper.mapping.marker import Column

# --- Test models ---


@dataclass
class Employee:
    employeeId: Annotated[int, Column()]
    fullName: Annotated[str, Column()]
    salary: Annotated[Decimal | None, Column()]
    hiredOn: Annotated[date | None, Column(format="dd.MM.yyyy")]
    active: Annotated[bool, Column()]
    managerId: Annotated[int | None, Column()]


class Audit(BaseModel):
    id: Annotated[int, Column()]
    created: Annotated[datetime, Column("created_at")]
    note: Annotated[str | None, Column()] = None


# --- Fixtures ---


@pytest.fixture
def db(sqlite_conn: sqlite3.Connection) -> sqlite3.Connection:
    sqlite_conn.executescript(
        """
        CREATE TABLE employee (
            employee_id INTEGER PRIMARY KEY,
            full_name TEXT NOT NULL,
            salary TEXT,
            hired_on TEXT,
            active INTEGER NOT NULL,
            manager_id INTEGER
        );
        INSERT INTO employee VALUES (1, 'Ada Lovelace', '5200.50', '10.12.2015', 1, NULL);
        INSERT INTO employee VALUES (2, 'Alan Turing', NULL, NULL, 0, 1);
        INSERT INTO employee VALUES (3, 'Grace Hopper', '6100.00', '09.12.2016', 1, 1);

        CREATE TABLE audit (id INTEGER PRIMARY KEY, created_at TEXT, note TEXT);
        INSERT INTO audit VALUES (1, '2024-03-01 12:30:00', 'first');
        INSERT INTO audit VALUES (2, '2024-03-02 08:00:00', NULL);
        """
    )
    return sqlite_conn


@pytest.fixture
def employee_mapper():
    return mapper_for(Employee).naming_strategy(NamingStrategy.SNAKE_CASE).build()


# --- Tests ---


class TestResultCursor:
    def test_maps_all_rows_in_order(self, db, employee_mapper) -> None:
        cursor = db.execute("SELECT * FROM employee ORDER BY employee_id")
        employees = employee_mapper.map_all(ResultCursor(cursor))

        assert [e.employeeId for e in employees] == [1, 2, 3]
        assert employees[0] == Employee(
            1, "Ada Lovelace", Decimal("5200.50"), date(2015, 12, 10), True, None
        )

    def test_nulls(self, db, employee_mapper) -> None:
        cursor = db.execute("SELECT * FROM employee WHERE employee_id = 2")
        (alan,) = employee_mapper.map_all(ResultCursor(cursor))

        assert alan.salary is None
        assert alan.hiredOn is None
        assert alan.active is False
        assert alan.managerId == 1

    def test_upper_case_labels(self, db, employee_mapper) -> None:
        cursor = db.execute(
            "SELECT employee_id AS EMPLOYEE_ID, full_name AS FULL_NAME, active AS ACTIVE "
            "FROM employee WHERE employee_id = 3"
        )
        (grace,) = employee_mapper.map_all(ResultCursor(cursor))

        assert grace.employeeId == 3
        assert grace.fullName == "Grace Hopper"
        assert grace.salary is None
        assert grace.active is True

    def test_sqlite_row_factory(self, db, employee_mapper) -> None:
        db.row_factory = sqlite3.Row
        cursor = db.execute("SELECT * FROM employee ORDER BY employee_id DESC")
        employees = employee_mapper.map_all(ResultCursor(cursor))
        assert [e.fullName for e in employees] == ["Grace Hopper", "Alan Turing", "Ada Lovelace"]

    def test_empty_result(self, db, employee_mapper) -> None:
        cursor = db.execute("SELECT * FROM employee WHERE employee_id > 100")
        assert employee_mapper.map_all(ResultCursor(cursor)) == []

    def test_non_query_cursor(self, db, employee_mapper) -> None:
        cursor = db.execute("UPDATE employee SET active = 1")
        assert employee_mapper.map_all(ResultCursor(cursor)) == []

    def test_pydantic_target(self, db) -> None:
        mapper = mapper_for(Audit).build()
        audits = mapper.map_all(ResultCursor(db.execute("SELECT * FROM audit ORDER BY id")))

        assert audits[0] == Audit(id=1, created=datetime(2024, 3, 1, 12, 30), note="first")
        assert audits[1].note is None

    def test_bad_date_aborts(self, db, employee_mapper) -> None:
        db.execute("UPDATE employee SET hired_on = '2015-12-10' WHERE employee_id = 1")
        cursor = db.execute("SELECT * FROM employee ORDER BY employee_id")
        with pytest.raises(ConversionError) as exc_info:
            employee_mapper.map_all(ResultCursor(cursor))
        assert exc_info.value.column_name == "hired_on"
