"""
Example 02: Scanning rows into records

This example demonstrates inserting rows into SQLite and binding the result
set back into dataclasses, Pydantic models and plain dicts.
"""

import sqlite3
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field

from row_bind import DBAPIRows, JsonTime, RowScanner, build_insert, scan, scan_to_maps


@dataclass
class UserDataclass:
    """User model using dataclass"""
    id: int = 0
    UserName: str = ""
    age: int = 0
    tags: list[str] = field(default_factory=list)


class UserPydantic(BaseModel):
    """User model using Pydantic"""
    id: int = 0
    name: str = Field(default="", json_schema_extra={"db": "user_name"})
    age: int = 0


@dataclass
class Event:
    """Event with a JsonTime field"""
    name: str = ""
    at: JsonTime | None = None


def main():
    sqlite3.register_converter("TIMESTAMP", lambda b: datetime.fromisoformat(b.decode()))
    conn = sqlite3.connect(":memory:", detect_types=sqlite3.PARSE_DECLTYPES)
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, user_name TEXT, age INTEGER)")
    conn.execute("CREATE TABLE events (name TEXT, at TIMESTAMP)")

    sql, args = build_insert(
        "users",
        [UserDataclass(UserName="alice", age=30), UserDataclass(UserName="bob", age=25)],
        dialect="sqlite",
    )
    conn.execute(sql, args)
    conn.execute(*build_insert("events", {"name": "signup", "at": "2024-05-06 07:08:09"}, dialect="sqlite"))
    conn.commit()

    print("=== Scanning into records ===\n")

    # One record
    with DBAPIRows(conn.execute("SELECT * FROM users ORDER BY id")) as rows:
        user = scan(rows, UserDataclass)
    print(f"first dataclass: {user}")

    # All records
    with DBAPIRows(conn.execute("SELECT * FROM users ORDER BY id")) as rows:
        users = scan(rows, list[UserPydantic])
    for u in users:
        print(f"  - {u.name} ({u.age})")

    # Binding into an existing instance
    existing = UserDataclass(tags=["admin"])
    with DBAPIRows(conn.execute("SELECT user_name FROM users WHERE id = 2")) as rows:
        scan(rows, existing)
    print(f"existing instance: {existing}\n")

    # Timestamps parsed by the driver bind into JsonTime
    with DBAPIRows(conn.execute("SELECT name, at FROM events")) as rows:
        event = RowScanner().scan_one(rows, Event)
    print(f"event: {event.name} at {event.at}\n")

    print("=== Scanning into dicts ===\n")
    with DBAPIRows(conn.execute("SELECT * FROM users")) as rows:
        for row in scan_to_maps(rows):
            print(f"  {row}")

    conn.close()


if __name__ == "__main__":
    main()
