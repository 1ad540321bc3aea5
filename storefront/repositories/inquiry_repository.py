"""
Inquiry Repository - Data Access Layer for contact form messages
"""
from typing import List, Optional

from storefront.domain.inquiry import Inquiry, InquiryCreate
from storefront.core.database import get_db_connection_dict


INQUIRY_COLUMNS = "id, name, email, phone, subject, message, status, created_at, updated_at"


class InquiryRepository:

    def find_all(self, status: Optional[str] = None) -> List[Inquiry]:
        """Inquiries, newest first"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            conditions = []
            params = []

            if status:
                conditions.append("status = %s")
                params.append(status)

            where_clause = " AND ".join(conditions) if conditions else "1=1"

            cursor.execute(f"""
                SELECT {INQUIRY_COLUMNS}
                FROM inquiries
                WHERE {where_clause}
                ORDER BY created_at DESC
            """, params)

            return [Inquiry(**row) for row in cursor.fetchall()]

        finally:
            cursor.close()
            conn.close()

    def create(self, data: InquiryCreate) -> Inquiry:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO inquiries (name, email, phone, subject, message, status, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, 'new', NOW(), NOW())
                RETURNING {INQUIRY_COLUMNS}
            """, (data.name, str(data.email), data.phone, data.subject, data.message))

            row = cursor.fetchone()
            conn.commit()
            return Inquiry(**row)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def update_status(self, inquiry_id: int, status: str) -> Optional[Inquiry]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE inquiries
                SET status = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {INQUIRY_COLUMNS}
            """, (status, inquiry_id))

            row = cursor.fetchone()
            conn.commit()
            return Inquiry(**row) if row else None

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def delete(self, inquiry_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM inquiries WHERE id = %s RETURNING id", (inquiry_id,))
            deleted = cursor.fetchone() is not None
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
