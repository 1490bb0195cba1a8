"""Using UnitOfWork with your own database.

UnitOfWork works with anything that has commit() and rollback(), such as a
sqlite3 connection. Store the file and write your own rows in one block: the
rows are committed only if nothing inside the block fails.
"""

import sqlite3
from pathlib import Path

from contentstash import ContentStore, UnitOfWork, check_content_type


store = ContentStore(Path("./uploads"))
store.directory.mkdir(exist_ok=True)

conn = sqlite3.connect("app.db")
conn.execute("CREATE TABLE IF NOT EXISTS avatars (user_id INTEGER, file TEXT)")
conn.commit()


def set_avatar(user_id: int, upload_path: Path) -> str:
    """Store an uploaded avatar and point the user at it."""
    with upload_path.open("rb") as upload:
        check_content_type(upload, "image/png", "image/jpeg")
        with UnitOfWork(conn):
            stored = store.save(upload, upload_path.suffix.lower())
            conn.execute(
                "INSERT INTO avatars (user_id, file) VALUES (?, ?)",
                (user_id, stored.name),
            )
    return stored.name


# Record an error without raising; the block rolls back on exit
def set_avatar_unless_banned(user_id: int, upload_path: Path, banned: set[str]) -> None:
    with upload_path.open("rb") as upload, UnitOfWork(conn) as uow:
        stored = store.save(upload, upload_path.suffix.lower())
        conn.execute(
            "INSERT INTO avatars (user_id, file) VALUES (?, ?)",
            (user_id, stored.name),
        )
        if stored.identifier in banned:
            uow.fail(ValueError("content is banned"))


if __name__ == "__main__":
    print(set_avatar(1, Path("avatar.png")))
