from typing import Optional

from elderly_assistant.common.models import CamelModel


class UserBase(CamelModel):
    """Profil de base (table USER_BASE). phone est stocké chiffré (AES) en amont: valeur opaque ici."""
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_age: Optional[int] = None
    phone: Optional[str] = None
    dialect_type: Optional[str] = None
    avatar_url: Optional[str] = None
    create_time: Optional[int] = None
    update_time: Optional[int] = None
