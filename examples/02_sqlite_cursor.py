"""
Example 02: Mapping a DB-API Cursor

This example runs a query against an in-memory SQLite database and maps the
result set with ResultCursor, using a custom converter for a value type the
standard converters do not know.
"""

import logging
import sqlite3
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated

from row_mapper import Column, ConversionError, NamingStrategy, ResultCursor, mapper_for


class Money:
    def __init__(self, amount, currency):
        self.amount = amount
        self.currency = currency

    def __repr__(self):
        return f"Money({self.amount} {self.currency})"


def money_converter(row, column, attributes):
    text = row.get_string(column)
    if text is None:
        return None
    amount, currency = text.split()
    return Money(Decimal(amount), currency)


@dataclass
class Order:
    orderId: Annotated[int, Column()]
    customer: Annotated[str, Column("customer_name")]
    total: Annotated[Money | None, Column()]
    shipped: Annotated[bool, Column()]


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    conn = sqlite3.connect(":memory:")
    conn.executescript("""
        CREATE TABLE orders (
            order_id INTEGER PRIMARY KEY,
            customer_name TEXT NOT NULL,
            total TEXT,
            shipped INTEGER NOT NULL
        );
        INSERT INTO orders VALUES (1, 'Alice', '19.99 EUR', 1);
        INSERT INTO orders VALUES (2, 'Bob', NULL, 0);
        INSERT INTO orders VALUES (3, 'Charlie', '5.00 USD', 0);
    """)

    mapper = (
        mapper_for(Order)
        .naming_strategy(NamingStrategy.SNAKE_CASE)
        .ignore_unknown_types(False)
        .register_converter(Money, money_converter)
        .build()
    )

    print("=== Mapping a DB-API Cursor ===\n")

    cursor = conn.execute("SELECT * FROM orders ORDER BY order_id")
    for order in mapper.map_all(ResultCursor(cursor)):
        print(order)

    # A failing row aborts the whole batch
    conn.execute("UPDATE orders SET total = 'free' WHERE order_id = 2")
    try:
        mapper.map_all(ResultCursor(conn.execute("SELECT * FROM orders")))
    except ConversionError as e:
        print(f"\nConversion failed: {e}")
        print(f"Caused by: {e.__cause__!r}")

    conn.close()


if __name__ == "__main__":
    main()
