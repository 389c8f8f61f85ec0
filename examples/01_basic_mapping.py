"""
Example 01: Basic Row Mapping

This example maps plain dict rows onto a dataclass, a NamedTuple and a
Pydantic model, showing naming strategies, field overrides and the
null-versus-zero rules for primitive fields.
"""

from dataclasses import dataclass
from datetime import date
from typing import Annotated, NamedTuple

from pydantic import BaseModel

from row_mapper import Column, NamingStrategy, mapper_for


@dataclass
class User:
    userId: Annotated[int, Column()]
    fullName: Annotated[str, Column()]
    isActive: Annotated[bool, Column("ACTIVE")]
    signedUp: Annotated[date | None, Column(format="dd/MM/yyyy")]
    nickname: str = ""  # no marker: never mapped


class Point(NamedTuple):
    x: Annotated[int, Column()]
    y: Annotated[int, Column()] = -1


class Customer(BaseModel):
    id: Annotated[int, Column()]
    email: Annotated[str | None, Column()] = None
    tier: Annotated[str, Column()] = "basic"


def main():
    print("=== Basic Row Mapping ===\n")

    users = mapper_for(User).naming_strategy(NamingStrategy.SNAKE_CASE).build()
    print(f"Mapper: {users}")
    print(f"Column names: {users.plan.column_names}\n")

    # Column labels are matched case-insensitively by default
    user = users.map_one(
        {"USER_ID": 1, "FULL_NAME": "Alice", "ACTIVE": 1, "SIGNED_UP": "15/10/2023"}
    )
    print(f"Full row:    {user}")

    # Absent columns are skipped; primitives keep their zero value
    partial = users.map_one({"user_id": 2})
    print(f"Partial row: {partial}")

    # NULL stays None, even for an int field
    nulls = users.map_one({"user_id": None, "full_name": None})
    print(f"NULL row:    {nulls}\n")

    # Per-field override beats the Column marker
    renamed = (
        mapper_for(User)
        .naming_strategy(NamingStrategy.SNAKE_CASE)
        .map_field("fullName", column="display_name")
        .map_field("signedUp", format="yyyy-MM-dd")
        .build()
    )
    print(f"Override:    {renamed.map_one({'display_name': 'Bob', 'signed_up': '2024-01-31'})}\n")

    points = mapper_for(Point).build()
    print(f"NamedTuple:  {points.map_many([{'x': 1, 'y': 2}, {'x': 3}])}")

    customers = mapper_for(Customer).build()
    print(f"Pydantic:    {customers.map_one({'id': '7', 'tier': 'gold'})!r}")


if __name__ == "__main__":
    main()
