from __future__ import annotations

from typing import Optional

import psycopg

from taskmart.domain.entities import Account
from taskmart.domain.ports.account_repository import AccountRepositoryPort


class PgAccountRepository(AccountRepositoryPort):
    """
    Postgres implementation of AccountRepositoryPort over the `users` table.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    """

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self._conn = conn

    async def find_by_email(self, email: str) -> Optional[Account]:
        sql = """
        SELECT id, email, name
        FROM users
        WHERE email = LOWER(TRIM(%s))
        """
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (email,))
            row = await cur.fetchone()

        if not row:
            return None

        id_, db_email, db_name = row
        return Account(id=str(id_), email=str(db_email), name=db_name)

    async def set_password_hash(self, account_id: str, password_hash: str) -> None:
        sql = """
        UPDATE users
        SET password_hash = %s, updated_at = NOW()
        WHERE id = %s
        """
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (password_hash, account_id))
            if cur.rowcount == 0:
                raise RuntimeError(f"set_password_hash matched no row for {account_id}")
