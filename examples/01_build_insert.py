"""
Example 01: Building INSERT statements

This example demonstrates building INSERT and REPLACE statements from mappings,
records and the fluent builder, for several dialects.
"""

from dataclasses import dataclass, field

from row_bind import QuoteCols, Raw, build_insert, build_replace, insert


@dataclass
class User:
    """User record; zero-valued fields are left out of the INSERT"""
    id: int = 0
    UserName: str = ""
    email: str = field(default="", metadata={"db": "mail"})
    age: int = 0


def main():
    print("=== One-call builders ===\n")

    # A single mapping
    sql, args = build_insert("users", {"name": "Alice", "age": 30})
    print(f"mapping (mysql):      {sql}  {args}")

    # A batch of mappings; columns come from the first one
    stmt = build_insert(
        "users",
        [{"name": "Alice", "age": 30}, {"name": "Bob", "age": 25}],
        dialect="postgresql",
    )
    print(f"mappings (postgresql): {stmt.sql}  {stmt.args}")

    # A record; UserName -> user_name, email -> mail
    sql, args = build_insert("users", User(UserName="carol", email="c@example.com"), dialect="oracle")
    print(f"record (oracle):      {sql}  {args}")

    # REPLACE with quoted columns
    sql, args = build_replace("users", QuoteCols({"id": 1, "name": "Dave"}), dialect="mssql")
    print(f"replace (mssql):      {sql}  {args}\n")

    print("=== Fluent builder ===\n")

    sb = insert("app.users", dialect="postgresql")
    sb.cols("name", "created_at").values("Eve", Raw("NOW()")).values("Frank", Raw("NOW()"))
    sb.option("ON CONFLICT (name) DO NOTHING")
    sql, args = sb.build()
    print(f"{sql}\n  args: {args}")


if __name__ == "__main__":
    main()
