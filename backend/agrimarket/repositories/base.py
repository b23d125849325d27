"""
Connection handling shared by all repositories
"""
from contextlib import contextmanager

from agrimarket.core.database import get_db_connection_dict


class BaseRepository:
    """
    Base class for psycopg2 repositories

    Every query method takes an optional ``conn``. When it is given the
    statement joins the caller's transaction and the caller commits;
    otherwise the repository opens, commits and closes its own connection.
    """

    @contextmanager
    def _cursor(self, conn=None, commit: bool = False):
        owns_connection = conn is None
        if owns_connection:
            conn = get_db_connection_dict()

        cursor = conn.cursor()
        try:
            yield cursor
            if commit and owns_connection:
                conn.commit()
        except Exception:
            if owns_connection:
                conn.rollback()
            raise
        finally:
            cursor.close()
            if owns_connection:
                conn.close()
