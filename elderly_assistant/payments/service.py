"""
Cas d'usage 'payments': règles métier au-dessus du repository PAYMENT_CONFIG.
- Validation des identifiants (InvalidArgument), sans appel BD si invalide.
- Création: génération d'ID "PAY_ITEM_<snowflake>", horodatage, statut dérivé du montant.
- Marquage payé: statut "已缴清", montant remis à zéro, last_pay_time/update_time à maintenant.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from elderly_assistant.common.errors import InvalidArgument, NotFound, PersistenceError
from elderly_assistant.utils.ids import next_id_str, now_ms
from . import repository
from .models import ITEM_ID_PREFIX, STATUS_PAID, STATUS_UNPAID, PaymentItem

logger = logging.getLogger(__name__)


def derive_status(amount: Optional[Decimal]) -> str:
    """Strictement positif -> "欠费", sinon (zéro ou absent) -> "已缴清"."""
    return STATUS_UNPAID if (amount or Decimal("0")) > 0 else STATUS_PAID


def list_user_items(user_id: Optional[str]) -> List[PaymentItem]:
    logger.info("payments.list_user_items user_id=%s", user_id)
    if not user_id:
        raise InvalidArgument("用户ID不能为空")
    items = repository.list_by_user(user_id)
    logger.info("payments.list_user_items user_id=%s count=%s", user_id, len(items))
    return items


def get_by_id(item_id: Optional[str]) -> Optional[PaymentItem]:
    if not item_id:
        raise InvalidArgument("缴费项目ID不能为空")
    return repository.get_by_id(item_id)


def create(item: PaymentItem) -> PaymentItem:
    """
    Crée un poste de facturation.
    - item_id absent: "PAY_ITEM_" + identifiant numérique unique
    - create_time/update_time: maintenant (ms)
    - status absent: dérivé du montant (derive_status)
    Soulève PersistenceError si l'insertion n'affecte aucune ligne.
    """
    now = now_ms()
    updates = {"create_time": now, "update_time": now}
    if not item.item_id:
        updates["item_id"] = ITEM_ID_PREFIX + next_id_str()
    if not item.status:
        updates["status"] = derive_status(item.amount)
    new_item = item.model_copy(update=updates)

    if not repository.insert(new_item):
        raise PersistenceError("保存缴费项目失败")
    logger.info("payments.create item_id=%s status=%s", new_item.item_id, new_item.status)
    return new_item


def update(item: PaymentItem) -> bool:
    """Remplace l'entité complète (pas de fusion: l'appelant fournit tous les champs)."""
    if not item.item_id:
        raise InvalidArgument("缴费项目ID不能为空")
    item = item.model_copy(update={"update_time": now_ms()})
    return repository.update_by_id(item)


def mark_paid(item_id: Optional[str]) -> bool:
    # Écrase le montant dû: l'ancien montant n'est pas historisé
    if not item_id:
        raise InvalidArgument("缴费项目ID不能为空")
    item = repository.get_by_id(item_id)
    if item is None:
        raise NotFound("缴费项目不存在")

    now = now_ms()
    paid = item.model_copy(update={
        "status": STATUS_PAID,
        "amount": Decimal("0"),
        "last_pay_time": now,
        "update_time": now,
    })
    ok = repository.update_by_id(paid)
    logger.info("payments.mark_paid item_id=%s ok=%s", item_id, ok)
    return ok


def delete(item_id: Optional[str]) -> bool:
    if not item_id:
        raise InvalidArgument("缴费项目ID不能为空")
    return repository.delete_by_id(item_id)
