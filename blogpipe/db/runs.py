"""Run management in database."""

from datetime import datetime
from typing import Dict, List, Optional

import pendulum
from psycopg import Connection
from psycopg.types.json import Jsonb

from ..models import Run


class RunManager:
    """Manage pipeline runs in database."""

    def create_run(
        self,
        conn: Connection,
        phase: str,
        started_at: Optional[datetime] = None,
    ) -> int:
        """
        Create a new run record.

        Returns:
            Run ID
        """
        if started_at is None:
            started_at = pendulum.now()

        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO runs (phase, started_at, status)
                VALUES (%s, %s, 'running')
                RETURNING id
                """,
                (phase, started_at),
            )
            run_id = cur.fetchone()["id"]

        conn.commit()
        return run_id

    def update_run_status(
        self,
        conn: Connection,
        run_id: int,
        status: str,
        stats_json: Optional[Dict] = None,
        finished_at: Optional[datetime] = None,
    ) -> None:
        """Update run status and statistics."""
        if finished_at is None and status in ["success", "failed"]:
            finished_at = pendulum.now()

        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE runs
                SET
                    status = %s,
                    finished_at = %s,
                    stats_json = %s
                WHERE id = %s
                """,
                (status, finished_at, Jsonb(stats_json) if stats_json else None, run_id),
            )

        conn.commit()

    def get_recent_runs(
        self,
        conn: Connection,
        phase: Optional[str] = None,
        limit: int = 10,
    ) -> List[Run]:
        """Get recent runs, optionally for one phase."""
        with conn.cursor() as cur:
            if phase:
                cur.execute(
                    "SELECT * FROM runs WHERE phase = %s ORDER BY started_at DESC LIMIT %s",
                    (phase, limit),
                )
            else:
                cur.execute("SELECT * FROM runs ORDER BY started_at DESC LIMIT %s", (limit,))
            return [Run(**row) for row in cur.fetchall()]
