from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_int, db_cursor, fetchall, fetchone
from .model import FaceSample
from .repository import FaceRepository


class MySQLFaceRepository(FaceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS cnt FROM face_training WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return as_int(row["cnt"]) if row else 0

    def insert(self, *, employee_id: int, face_data: str, quality_score: float) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO face_training(employee_id, face_data, quality_score) VALUES(%s,%s,%s)",
                (int(employee_id), face_data, float(quality_score)),
            )
            return int(cur.lastrowid)

    def update_for_employee(self, *, employee_id: int, face_data: str, quality_score: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE face_training SET face_data=%s, quality_score=%s WHERE employee_id=%s",
                (face_data, float(quality_score), int(employee_id)),
            )
            return cur.rowcount > 0

    def list_for_admin(self, admin_id: int) -> Sequence[FaceSample]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ft.training_id, ft.employee_id, ft.face_data, ft.quality_score, ft.created_at,
                       e.name, e.email
                FROM face_training ft
                JOIN employees e ON e.employee_id = ft.employee_id
                WHERE e.admin_id=%s
                ORDER BY ft.created_at DESC, ft.training_id DESC
                """,
                (int(admin_id),),
            )
            return [
                FaceSample(
                    training_id=int(r["training_id"]),
                    employee_id=int(r["employee_id"]),
                    face_data=r.get("face_data"),
                    quality_score=float(r["quality_score"]) if r.get("quality_score") is not None else None,
                    name=r["name"],
                    email=r["email"],
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def delete_for_employee(self, employee_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM face_training WHERE employee_id=%s", (int(employee_id),))
            return int(cur.rowcount)
