"""
User Repository - back-office accounts
"""
from typing import Optional, Tuple

from storefront.domain.user import User
from storefront.core.database import get_db_connection_dict


USER_COLUMNS = "id, email, name, role, is_active, created_at, updated_at"


class UserRepository:

    def find_by_id(self, user_id: int) -> Optional[User]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = %s", (user_id,))
            row = cursor.fetchone()
            return User(**row) if row else None

        finally:
            cursor.close()
            conn.close()

    def find_with_password_by_email(self, email: str) -> Optional[Tuple[User, str]]:
        """
        Find a user and their password hash for login

        Returns:
            (User, password_hash) or None if no user has this email
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {USER_COLUMNS}, password_hash
                FROM users
                WHERE LOWER(email) = LOWER(%s)
            """, (email,))

            row = cursor.fetchone()
            if not row:
                return None

            row = dict(row)
            password_hash = row.pop('password_hash')
            return User(**row), password_hash

        finally:
            cursor.close()
            conn.close()

    def get_password_hash(self, user_id: int) -> Optional[str]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT password_hash FROM users WHERE id = %s", (user_id,))
            row = cursor.fetchone()
            return row['password_hash'] if row else None

        finally:
            cursor.close()
            conn.close()

    def email_taken(self, email: str, exclude_user_id: int) -> bool:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id FROM users
                WHERE LOWER(email) = LOWER(%s) AND id <> %s
            """, (email, exclude_user_id))
            return cursor.fetchone() is not None

        finally:
            cursor.close()
            conn.close()

    def update_profile(self, user_id: int, email: Optional[str], name: Optional[str]) -> Optional[User]:
        update_fields = []
        values = []

        if email is not None:
            update_fields.append("email = %s")
            values.append(email)
        if name is not None:
            update_fields.append("name = %s")
            values.append(name)

        if not update_fields:
            return self.find_by_id(user_id)

        update_fields.append("updated_at = NOW()")
        values.append(user_id)

        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE users
                SET {', '.join(update_fields)}
                WHERE id = %s
                RETURNING {USER_COLUMNS}
            """, values)

            row = cursor.fetchone()
            conn.commit()
            return User(**row) if row else None

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def set_password_hash(self, user_id: int, password_hash: str):
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                UPDATE users SET password_hash = %s, updated_at = NOW()
                WHERE id = %s
            """, (password_hash, user_id))
            conn.commit()

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
