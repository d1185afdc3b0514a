"""Couche d'accès aux données (Supabase) pour la table USER_BASE, clé user_id.
Ligne absente -> None / False; erreur de transport -> PersistenceError (loggée).
"""
import logging
from typing import Optional

import elderly_assistant.infra.supabase_client as supabase_client
from elderly_assistant.common.errors import PersistenceError
from elderly_assistant.users.models import UserBase

logger = logging.getLogger(__name__)

TABLE = "USER_BASE"
ID_COLUMN = "user_id"


def get_by_id(user_id: str) -> Optional[UserBase]:
    try:
        res = supabase_client.get_supabase().table(TABLE).select("*").eq(ID_COLUMN, user_id).limit(1).execute()
    except Exception as e:
        logger.exception("users.repository.get_by_id failed user_id=%s", user_id)
        raise PersistenceError(f"查询用户失败: {e}") from e
    rows = res.data or []
    return UserBase.model_validate(rows[0]) if rows else None


def insert(user: UserBase) -> bool:
    try:
        res = supabase_client.get_service_supabase().table(TABLE).insert(user.model_dump()).execute()
    except Exception as e:
        logger.exception("users.repository.insert failed user_id=%s", user.user_id)
        raise PersistenceError(f"保存用户失败: {e}") from e
    return len(res.data or []) > 0


def update_by_id(user: UserBase) -> bool:
    row = user.model_dump()
    row.pop(ID_COLUMN, None)
    try:
        res = supabase_client.get_service_supabase().table(TABLE).update(row).eq(ID_COLUMN, user.user_id).execute()
    except Exception as e:
        logger.exception("users.repository.update_by_id failed user_id=%s", user.user_id)
        raise PersistenceError(f"更新用户失败: {e}") from e
    return len(res.data or []) > 0


def delete_by_id(user_id: str) -> bool:
    try:
        res = supabase_client.get_service_supabase().table(TABLE).delete().eq(ID_COLUMN, user_id).execute()
    except Exception as e:
        logger.exception("users.repository.delete_by_id failed user_id=%s", user_id)
        raise PersistenceError(f"删除用户失败: {e}") from e
    return len(res.data or []) > 0
