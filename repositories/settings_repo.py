"""
repositories/settings_repo.py
-----------------------------
Data access layer for the single settings row.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, release_connection
from models.settings import PersonalDetails, Settings
from repositories.base import SettingsRepository
from utils.exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresSettingsRepository(SettingsRepository):
    """Reads and upserts the settings row (id = 1)."""

    def load(self) -> Optional[Settings]:
        sql = "SELECT theme, currency, first_name, last_name, email FROM settings WHERE id = 1;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                row = cur.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Failed to load settings: {e}")
            raise PersistenceError(f"Failed to load settings: {e}") from e
        finally:
            release_connection(conn)
        if not row:
            return None
        defaults = PersonalDetails()
        return Settings(
            theme=row[0],
            currency=row[1],
            personal_details=PersonalDetails(
                first_name=row[2] if row[2] is not None else defaults.first_name,
                last_name=row[3] if row[3] is not None else defaults.last_name,
                email=row[4] if row[4] is not None else defaults.email,
            ),
        )

    def save(self, settings: Settings) -> None:
        sql = """
            INSERT INTO settings (id, theme, currency, first_name, last_name, email)
            VALUES (1, %s, %s, %s, %s, %s)
            ON CONFLICT (id)
            DO UPDATE SET theme = EXCLUDED.theme,
                          currency = EXCLUDED.currency,
                          first_name = EXCLUDED.first_name,
                          last_name = EXCLUDED.last_name,
                          email = EXCLUDED.email;
        """
        details = settings.personal_details
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    settings.theme, settings.currency,
                    details.first_name, details.last_name, details.email,
                ))
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to save settings: {e}")
            raise PersistenceError(f"Failed to save settings: {e}") from e
        finally:
            release_connection(conn)

    def clear(self) -> None:
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM settings;")
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to clear settings: {e}")
            raise PersistenceError(f"Failed to clear settings: {e}") from e
        finally:
            release_connection(conn)
