# module elderly_assistant.payments.views

"""Endpoints de la feature Paiement (préfixe /payment).
- /unpaid-items et /history: postes de l'utilisateur (même requête non filtrée, comportement historique).
- /voice-pay: paiement vocal simulé (réponse fixe, aucune passerelle de paiement branchée).
- /mark-paid: marque un poste comme réglé.
- /items: gestion CRUD des postes de facturation.
Toutes les réponses utilisent l'enveloppe {code, message, data}; chaque endpoint intercepte ses erreurs.
"""
import logging

from fastapi import APIRouter, Depends, Query

from elderly_assistant.common.result import error, from_exception, success, to_envelope
from elderly_assistant.utils.ids import now_ms
from elderly_assistant.utils.rate_limit import optional_rate_limit
from elderly_assistant.payments import service as payments_service
from elderly_assistant.payments.models import PaymentItem, VoicePayRequest, VoicePayResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payment", tags=["Payment API"])

VOICE_PAY_GREETING = "您好，请问需要缴纳什么费用？"


def _list_items(user_id: str, label: str) -> dict:
    try:
        items = payments_service.list_user_items(user_id)
        return success([i.to_wire() for i in items])
    except Exception as e:
        logger.exception("Erreur %s user_id=%s", label, user_id)
        return to_envelope(from_exception(e))


@router.get("/unpaid-items")
def get_unpaid_items(user_id: str = Query(...)):
    """Postes de l'utilisateur (non filtrés par statut), les plus récents d'abord."""
    logger.info("payment.unpaid-items user_id=%s", user_id)
    return _list_items(user_id, "unpaid-items")


@router.get("/history")
def get_payment_history(user_id: str = Query(...)):
    """Historique des paiements: même liste que /unpaid-items."""
    logger.info("payment.history user_id=%s", user_id)
    return _list_items(user_id, "history")


@router.post("/voice-pay", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def voice_pay(request: VoicePayRequest):
    """
    Paiement vocal (simulation).
    - Ignore l'audio reçu et renvoie une salutation avec un nouvel identifiant de session.
    - paymentOrder reste null: pas d'intégration de passerelle de paiement.
    """
    logger.info("payment.voice-pay user_id=%s session_id=%s", request.user_id, request.session_id)
    try:
        response = VoicePayResponse(
            session_id=f"SESSION_{now_ms()}",
            reply_text=VOICE_PAY_GREETING,
            need_tts=True,
        )
        return success(response.to_wire())
    except Exception as e:
        logger.exception("Erreur voice_pay")
        return to_envelope(from_exception(e))


@router.post("/mark-paid")
def mark_paid(item_id: str = Query(...)):
    logger.info("payment.mark-paid item_id=%s", item_id)
    try:
        ok = payments_service.mark_paid(item_id)
        return success() if ok else error("标记失败")
    except Exception as e:
        logger.exception("Erreur mark_paid item_id=%s", item_id)
        return to_envelope(from_exception(e))


@router.post("/items")
def create_item(item: PaymentItem):
    try:
        created = payments_service.create(item)
        return success(created.to_wire())
    except Exception as e:
        logger.exception("Erreur create_item")
        return to_envelope(from_exception(e))


@router.get("/items/{item_id}")
def get_item(item_id: str):
    try:
        item = payments_service.get_by_id(item_id)
        if item is None:
            return error("缴费项目不存在")
        return success(item.to_wire())
    except Exception as e:
        logger.exception("Erreur get_item item_id=%s", item_id)
        return to_envelope(from_exception(e))


@router.put("/items/{item_id}")
def update_item(item_id: str, item: PaymentItem):
    """Remplacement complet du poste (l'ID du chemin prime sur celui du corps)."""
    try:
        ok = payments_service.update(item.model_copy(update={"item_id": item_id}))
        return success() if ok else error("更新失败")
    except Exception as e:
        logger.exception("Erreur update_item item_id=%s", item_id)
        return to_envelope(from_exception(e))


@router.delete("/items/{item_id}")
def delete_item(item_id: str):
    try:
        ok = payments_service.delete(item_id)
        return success() if ok else error("删除失败")
    except Exception as e:
        logger.exception("Erreur delete_item item_id=%s", item_id)
        return to_envelope(from_exception(e))
