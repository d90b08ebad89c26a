import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.config import ServiceConfig

DATA_DIR = (Path(__file__).parents[2] / "data")
_cfg = ServiceConfig()
DB_PATH: Path = Path(_cfg.db_path) if _cfg.db_path else DATA_DIR / "interlocking.db"


def set_db_path(path: Path) -> None:
    global DB_PATH
    DB_PATH = Path(path)


def _conn() -> sqlite3.Connection:
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def _decode(row: sqlite3.Row) -> Dict[str, Any]:
    d = dict(row)
    d["payload"] = json.loads(d["payload"])
    return d


def init_db() -> None:
    with _conn() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS corridors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                payload TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        conn.commit()


def save_corridor(name: str, payload: Dict[str, Any]) -> int:
    with _conn() as conn:
        cur = conn.cursor()
        cur.execute("INSERT INTO corridors(name, payload) VALUES(?, ?)", (name, json.dumps(payload, ensure_ascii=False)))
        conn.commit()
        return int(cur.lastrowid)


def list_corridors(offset: int = 0, limit: int = 50) -> List[Dict[str, Any]]:
    with _conn() as conn:
        rows = conn.execute(
            "SELECT id, name, payload, created_at FROM corridors ORDER BY id DESC LIMIT ? OFFSET ?",
            (limit, offset),
        ).fetchall()
        return [_decode(r) for r in rows]


def get_corridor(cid: int) -> Optional[Dict[str, Any]]:
    with _conn() as conn:
        r = conn.execute("SELECT id, name, payload, created_at FROM corridors WHERE id=?", (cid,)).fetchone()
        return _decode(r) if r else None


def update_corridor(cid: int, name: Optional[str] = None, payload: Optional[Dict[str, Any]] = None) -> bool:
    sets = []
    args: List[Any] = []
    if name is not None:
        sets.append("name=?")
        args.append(name)
    if payload is not None:
        sets.append("payload=?")
        args.append(json.dumps(payload, ensure_ascii=False))
    if not sets:
        return False
    args.append(cid)
    with _conn() as conn:
        cur = conn.cursor()
        cur.execute(f"UPDATE corridors SET {', '.join(sets)} WHERE id=?", tuple(args))
        conn.commit()
        return cur.rowcount > 0


def delete_corridor(cid: int) -> bool:
    with _conn() as conn:
        cur = conn.cursor()
        cur.execute("DELETE FROM corridors WHERE id=?", (cid,))
        conn.commit()
        return cur.rowcount > 0
