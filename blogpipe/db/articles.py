"""Article storage and state transitions."""

from typing import List, Optional, Sequence

from psycopg import Connection
from psycopg.types.json import Jsonb

from ..models import Article, DiscoveryRecord, Reference


class ArticleStore:
    """Persist articles keyed by URL.

    Each write is a single statement committed on its own.
    """

    def upsert_scraped(
        self,
        conn: Connection,
        record: DiscoveryRecord,
        content: str,
    ) -> bool:
        """
        Insert or refresh a scraped article.

        A re-scraped URL gets the new text as both original and current
        content and goes back to pending, with its references cleared.

        Returns:
            True if the URL was new
        """
        with conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO articles (
                    url, title, date, original_content, content,
                    is_updated, references_json
                ) VALUES (%s, %s, %s, %s, %s, FALSE, '[]'::jsonb)
                ON CONFLICT (url) DO UPDATE SET
                    title = EXCLUDED.title,
                    date = EXCLUDED.date,
                    original_content = EXCLUDED.original_content,
                    content = EXCLUDED.content,
                    is_updated = FALSE,
                    references_json = '[]'::jsonb
                RETURNING (xmax = 0) AS inserted
                """,
                (record.url, record.title, record.date, content, content),
            )
            inserted = cur.fetchone()["inserted"]

        conn.commit()
        return bool(inserted)

    def select_pending(self, conn: Connection, limit: Optional[int] = None) -> List[Article]:
        """Get articles still awaiting augmentation, oldest first."""
        query = "SELECT * FROM articles WHERE is_updated = FALSE ORDER BY id"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT %s"
            params = (limit,)

        with conn.cursor() as cur:
            cur.execute(query, params)
            return [Article.from_row(row) for row in cur.fetchall()]

    def mark_augmented(
        self,
        conn: Connection,
        url: str,
        content: str,
        references: Sequence[Reference],
    ) -> bool:
        """
        Store a rewritten body and flag the article as augmented.

        Only a pending article is updated; ``original_content`` is never
        touched.

        Returns:
            True if a pending article was updated
        """
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE articles
                SET
                    content = %s,
                    is_updated = TRUE,
                    references_json = %s
                WHERE url = %s AND is_updated = FALSE
                """,
                (content, Jsonb([r.model_dump() for r in references]), url),
            )
            updated = cur.rowcount == 1

        conn.commit()
        return updated

    def list_articles(self, conn: Connection, limit: Optional[int] = None) -> List[Article]:
        """Get stored articles, newest first."""
        query = "SELECT * FROM articles ORDER BY id DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT %s"
            params = (limit,)

        with conn.cursor() as cur:
            cur.execute(query, params)
            return [Article.from_row(row) for row in cur.fetchall()]

    def get_article(self, conn: Connection, url: str) -> Optional[Article]:
        """Get one article by URL."""
        with conn.cursor() as cur:
            cur.execute("SELECT * FROM articles WHERE url = %s", (url,))
            row = cur.fetchone()
            return Article.from_row(row) if row else None
