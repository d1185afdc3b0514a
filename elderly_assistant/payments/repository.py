"""
Accès aux données pour la feature 'payments' (table PAYMENT_CONFIG).
- Lecture: list_by_user (tri create_time décroissant), get_by_id.
- Écriture: insert, update_by_id, delete_by_id -> bool (au moins une ligne affectée).
- Ligne absente: None / False. Erreur de transport: PersistenceError (loggée).
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import elderly_assistant.infra.supabase_client as supabase_client
from elderly_assistant.common.errors import PersistenceError
from elderly_assistant.payments.models import PaymentItem

logger = logging.getLogger(__name__)

TABLE = "PAYMENT_CONFIG"
ID_COLUMN = "config_id"

# Champs du modèle dont la colonne porte un autre nom
_COLUMNS = {
    "item_id": ID_COLUMN,
    "item_type": "payment_type",
    "account": "account_number",
    "amount": "default_amount",
}
_FIELDS = {col: field for field, col in _COLUMNS.items()}


def to_row(item: PaymentItem) -> Dict[str, Any]:
    """Convertit un PaymentItem en ligne BD (toutes les colonnes, None compris: pas de fusion).
    Decimal envoyé en chaîne: montant exact dans la colonne numeric."""
    row: Dict[str, Any] = {}
    for field, value in item.model_dump().items():
        if isinstance(value, Decimal):
            value = str(value)
        row[_COLUMNS.get(field, field)] = value
    return row


def from_row(row: Dict[str, Any]) -> PaymentItem:
    data = {_FIELDS.get(col, col): value for col, value in (row or {}).items()}
    return PaymentItem.model_validate(data)


# module elderly_assistant.payments.repository
def list_by_user(user_id: str) -> List[PaymentItem]:
    """
    Postes de l'utilisateur, les plus récents d'abord.
    - Filtre: eq("user_id", user_id)
    - Tri: create_time décroissant, puis config_id (ordre stable entre deux appels)
    """
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
        logger.exception("payments.repository.list_by_user failed user_id=%s", user_id)
        raise PersistenceError(f"查询缴费项目失败: {e}") from e
    return [from_row(r) for r in (res.data or [])]


def get_by_id(item_id: str) -> Optional[PaymentItem]:
    try:
        res = (
            supabase_client.get_supabase()
            .table(TABLE)
            .select("*")
            .eq(ID_COLUMN, item_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.exception("payments.repository.get_by_id failed item_id=%s", item_id)
        raise PersistenceError(f"查询缴费项目失败: {e}") from e
    rows = res.data or []
    return from_row(rows[0]) if rows else None


def insert(item: PaymentItem) -> bool:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table(TABLE)
            .insert(to_row(item))
            .execute()
        )
    except Exception as e:
        logger.exception("payments.repository.insert failed item_id=%s", item.item_id)
        raise PersistenceError(f"保存缴费项目失败: {e}") from e
    return len(res.data or []) > 0


def update_by_id(item: PaymentItem) -> bool:
    """Met à jour toutes les colonnes de la ligne config_id=item.item_id. False si aucune ligne."""
    row = to_row(item)
    row.pop(ID_COLUMN, None)
    try:
        res = (
            supabase_client.get_service_supabase()
            .table(TABLE)
            .update(row)
            .eq(ID_COLUMN, item.item_id)
            .execute()
        )
    except Exception as e:
        logger.exception("payments.repository.update_by_id failed item_id=%s", item.item_id)
        raise PersistenceError(f"更新缴费项目失败: {e}") from e
    return len(res.data or []) > 0


def delete_by_id(item_id: str) -> bool:
    try:
        res = (
            supabase_client.get_service_supabase()
            .table(TABLE)
            .delete()
            .eq(ID_COLUMN, item_id)
            .execute()
        )
    except Exception as e:
        logger.exception("payments.repository.delete_by_id failed item_id=%s", item_id)
        raise PersistenceError(f"删除缴费项目失败: {e}") from e
    return len(res.data or []) > 0
