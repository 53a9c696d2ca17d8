"""
Программа: «Контакты» – веб-приложение для сбора и администрирования контактов.
Модуль: models/contact.py – модель контакта.

Назначение модуля:
- Описание ORM-модели Contact (таблица `contacts`).
- Сериализация записи в JSON-представление для API.
"""

from datetime import datetime, timezone

from extensions import db


class Contact(db.Model):
    """Контакт, оставленный посетителем через публичную форму."""
    __tablename__ = "contacts"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.Text, nullable=False)
    phone = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        server_default=db.func.current_timestamp(),
        nullable=False,
    )

    def to_dict(self) -> dict:
        """Возвращает контакт в формате ответа API."""
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "created_at": self._created_at_utc(),
        }

    def _created_at_utc(self) -> str | None:
        """Время создания в ISO-8601 с явной зоной UTC (в БД хранится без зоны)."""
        if self.created_at is None:
            return None
        created_at = self.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at.isoformat()

    def __repr__(self) -> str:
        return f"<Contact {self.id} {self.email!r}>"
