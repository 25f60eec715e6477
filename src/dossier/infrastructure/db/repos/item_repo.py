from __future__ import annotations

from pathlib import Path

from dossier.core.time import now_utc_iso
from dossier.domain.models.content_item import ContentItem, ItemTranslation
from dossier.domain.models.external_link import DEFAULT_LINK_TITLE, ExternalLink
from dossier.infrastructure.db.sqlite import connect, placeholders


class ItemRepo:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def ensure_translation(
        self,
        item_id: str,
        langcode: str,
        *,
        title: str | None = None,
    ) -> None:
        """Create the item and its ``langcode`` translation when missing.

        The first translation created for an item becomes its default language.
        """
        label = title or item_id
        with connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT OR IGNORE INTO items (id, title, default_langcode, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (item_id, label, langcode, now_utc_iso()),
            )
            conn.execute(
                """
                INSERT OR IGNORE INTO item_translations (item_id, langcode, title)
                VALUES (?, ?, ?)
                """,
                (item_id, langcode, label),
            )

    def append_file(self, item_id: str, langcode: str, field_name: str, file_uri: str) -> int:
        with connect(self.db_path) as conn:
            delta = self._next_delta(conn, "item_files", item_id, langcode, field_name)
            conn.execute(
                """
                INSERT INTO item_files (item_id, langcode, field_name, delta, file_uri)
                VALUES (?, ?, ?, ?, ?)
                """,
                (item_id, langcode, field_name, delta, file_uri),
            )
        return delta

    def append_link(
        self,
        item_id: str,
        langcode: str,
        field_name: str,
        uri: str,
        title: str | None = None,
    ) -> int:
        with connect(self.db_path) as conn:
            delta = self._next_delta(conn, "item_links", item_id, langcode, field_name)
            conn.execute(
                """
                INSERT INTO item_links (item_id, langcode, field_name, delta, uri, title)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (item_id, langcode, field_name, delta, uri, title),
            )
        return delta

    def load_items(self, item_ids: list[str]) -> dict[str, ContentItem]:
        """Load items keyed by id, in request order. Unknown ids are left out."""
        wanted = list(dict.fromkeys(str(item_id) for item_id in item_ids))
        if not wanted:
            return {}

        marks = placeholders(len(wanted))
        with connect(self.db_path) as conn:
            item_rows = conn.execute(
                f"SELECT * FROM items WHERE id IN ({marks})",
                wanted,
            ).fetchall()
            translation_rows = conn.execute(
                f"""
                SELECT * FROM item_translations
                WHERE item_id IN ({marks})
                ORDER BY rowid
                """,
                wanted,
            ).fetchall()
            file_rows = conn.execute(
                f"""
                SELECT * FROM item_files
                WHERE item_id IN ({marks})
                ORDER BY item_id, langcode, field_name, delta
                """,
                wanted,
            ).fetchall()
            link_rows = conn.execute(
                f"""
                SELECT * FROM item_links
                WHERE item_id IN ({marks})
                ORDER BY item_id, langcode, field_name, delta
                """,
                wanted,
            ).fetchall()

        found = {row["id"]: self._to_model(row) for row in item_rows}
        for row in translation_rows:
            item = found.get(row["item_id"])
            if item is not None:
                item.translations_by_langcode[row["langcode"]] = ItemTranslation(
                    langcode=row["langcode"],
                    title=row["title"],
                )
        for row in file_rows:
            translation = self._translation(found, row["item_id"], row["langcode"])
            if translation is not None:
                translation.files.setdefault(row["field_name"], []).append(row["file_uri"])
        for row in link_rows:
            translation = self._translation(found, row["item_id"], row["langcode"])
            if translation is not None:
                translation.links.setdefault(row["field_name"], []).append(
                    ExternalLink(uri=row["uri"], title=row["title"] or DEFAULT_LINK_TITLE)
                )

        return {item_id: found[item_id] for item_id in wanted if item_id in found}

    def list(self, limit: int = 100) -> list[ContentItem]:
        with connect(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT id FROM items
                ORDER BY created_at DESC, id
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return list(self.load_items([row["id"] for row in rows]).values())

    @staticmethod
    def _translation(
        found: dict[str, ContentItem],
        item_id: str,
        langcode: str,
    ) -> ItemTranslation | None:
        item = found.get(item_id)
        if item is None:
            return None
        return item.translations_by_langcode.get(langcode)

    @staticmethod
    def _next_delta(conn, table: str, item_id: str, langcode: str, field_name: str) -> int:
        row = conn.execute(
            f"""
            SELECT COALESCE(MAX(delta) + 1, 0) AS next_delta FROM {table}
            WHERE item_id = ? AND langcode = ? AND field_name = ?
            """,
            (item_id, langcode, field_name),
        ).fetchone()
        return int(row["next_delta"])

    @staticmethod
    def _to_model(row) -> ContentItem:
        return ContentItem(
            id=row["id"],
            title=row["title"],
            default_langcode=row["default_langcode"],
            created_at=row["created_at"],
        )
