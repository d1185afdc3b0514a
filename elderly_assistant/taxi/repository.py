"""
Accès aux données 'taxi' (table TAXI_ORDER), clé order_id.
Colonnes identiques aux champs du modèle (snake_case). Mêmes conventions que payments.repository:
ligne absente -> None / False, erreur de transport -> PersistenceError.
"""
import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

import elderly_assistant.infra.supabase_client as supabase_client
from elderly_assistant.common.errors import PersistenceError
from elderly_assistant.taxi.models import TaxiOrder

logger = logging.getLogger(__name__)

TABLE = "TAXI_ORDER"
ID_COLUMN = "order_id"


def to_row(order: TaxiOrder) -> Dict[str, Any]:
    row: Dict[str, Any] = {}
    for col, value in order.model_dump().items():
        if isinstance(value, Decimal):
            value = str(value)
        elif isinstance(value, Enum):
            value = int(value)
        row[col] = value
    return row


def list_by_user(user_id: str) -> List[TaxiOrder]:
    try:
        res = (
            supabase_client.get_supabase()
            .table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("create_time", desc=True)
            .order(ID_COLUMN)
            .execute()
        )
    except Exception as e:
        logger.exception("taxi.repository.list_by_user failed user_id=%s", user_id)
        raise PersistenceError(f"查询打车订单失败: {e}") from e
    return [TaxiOrder.model_validate(r) for r in (res.data or [])]


def get_by_id(order_id: str) -> Optional[TaxiOrder]:
    try:
        res = supabase_client.get_supabase().table(TABLE).select("*").eq(ID_COLUMN, order_id).limit(1).execute()
    except Exception as e:
        logger.exception("taxi.repository.get_by_id failed order_id=%s", order_id)
        raise PersistenceError(f"查询打车订单失败: {e}") from e
    rows = res.data or []
    return TaxiOrder.model_validate(rows[0]) if rows else None


def insert(order: TaxiOrder) -> bool:
    try:
        res = supabase_client.get_service_supabase().table(TABLE).insert(to_row(order)).execute()
    except Exception as e:
        logger.exception("taxi.repository.insert failed order_id=%s", order.order_id)
        raise PersistenceError(f"保存打车订单失败: {e}") from e
    return len(res.data or []) > 0


def update_by_id(order: TaxiOrder) -> bool:
    row = to_row(order)
    row.pop(ID_COLUMN, None)
    try:
        res = supabase_client.get_service_supabase().table(TABLE).update(row).eq(ID_COLUMN, order.order_id).execute()
    except Exception as e:
        logger.exception("taxi.repository.update_by_id failed order_id=%s", order.order_id)
        raise PersistenceError(f"更新打车订单失败: {e}") from e
    return len(res.data or []) > 0


def delete_by_id(order_id: str) -> bool:
    try:
        res = supabase_client.get_service_supabase().table(TABLE).delete().eq(ID_COLUMN, order_id).execute()
    except Exception as e:
        logger.exception("taxi.repository.delete_by_id failed order_id=%s", order_id)
        raise PersistenceError(f"删除打车订单失败: {e}") from e
    return len(res.data or []) > 0
