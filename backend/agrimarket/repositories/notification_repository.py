"""
Notification Repository - Data Access Layer for notifications
"""
from typing import List, Optional

from agrimarket.domain.notification import Notification, NotificationCreate, UserType
from agrimarket.repositories.base import BaseRepository

NOTIFICATION_COLUMNS = "id, user_type, title, message, type, related_id, is_read, date"


class NotificationRepository(BaseRepository):
    """Repository for Notification data access"""

    @staticmethod
    def _map_row_to_notification(row: dict) -> Notification:
        return Notification(
            id=row['id'],
            user_type=row['user_type'],
            title=row['title'],
            message=row['message'],
            type=row['type'],
            related_id=row.get('related_id'),
            is_read=row['is_read'],
            date=row['date'],
        )

    def find_unread_by_user_type(self, user_type: UserType, limit: int = 50) -> List[Notification]:
        """Unread notifications for an audience, newest first"""
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {NOTIFICATION_COLUMNS}
                FROM notifications
                WHERE user_type = %s AND is_read = FALSE
                ORDER BY date DESC
                LIMIT %s
            """, (user_type.value, limit))
            return [self._map_row_to_notification(row) for row in cursor.fetchall()]

    def create(self, notification: NotificationCreate) -> Notification:
        with self._cursor(commit=True) as cursor:
            cursor.execute(f"""
                INSERT INTO notifications (user_type, title, message, type, related_id)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {NOTIFICATION_COLUMNS}
            """, (
                notification.user_type.value,
                notification.title,
                notification.message,
                notification.type.value,
                notification.related_id,
            ))
            return self._map_row_to_notification(cursor.fetchone())

    def mark_as_read(self, notification_id: int) -> Optional[Notification]:
        """
        Flag a notification as read

        Marking an already-read notification again returns it unchanged.

        Returns:
            Notification or None if the ID does not exist
        """
        with self._cursor(commit=True) as cursor:
            cursor.execute(f"""
                UPDATE notifications
                SET is_read = TRUE
                WHERE id = %s
                RETURNING {NOTIFICATION_COLUMNS}
            """, (notification_id,))

            row = cursor.fetchone()
            if not row:
                return None
            return self._map_row_to_notification(row)

    def mark_all_as_read(self, user_type: UserType) -> int:
        """Flag every unread notification of an audience; returns rows updated"""
        with self._cursor(commit=True) as cursor:
            cursor.execute("""
                UPDATE notifications
                SET is_read = TRUE
                WHERE user_type = %s AND is_read = FALSE
            """, (user_type.value,))
            return cursor.rowcount
