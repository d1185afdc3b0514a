from decimal import Decimal

import pytest

from elderly_assistant.common.errors import InvalidArgument, NotFound, PersistenceError
from elderly_assistant.payments import service as payments_service
from elderly_assistant.payments.models import STATUS_PAID, STATUS_UNPAID, PaymentItem


class _Spy:
    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self.result


@pytest.mark.parametrize("user_id", [None, ""])
def test_list_user_items_rejects_empty_user_id_without_store_call(monkeypatch, user_id):
    spy = _Spy([])
    monkeypatch.setattr("elderly_assistant.payments.repository.list_by_user", spy)

    with pytest.raises(InvalidArgument) as exc:
        payments_service.list_user_items(user_id)

    assert exc.value.message == "用户ID不能为空"
    assert spy.calls == []


@pytest.mark.parametrize("fn", [payments_service.get_by_id, payments_service.mark_paid, payments_service.delete])
def test_item_operations_reject_empty_item_id(monkeypatch, fn):
    spy = _Spy(None)
    monkeypatch.setattr("elderly_assistant.payments.repository.get_by_id", spy)
    monkeypatch.setattr("elderly_assistant.payments.repository.delete_by_id", spy)

    with pytest.raises(InvalidArgument) as exc:
        fn("")

    assert exc.value.message == "缴费项目ID不能为空"
    assert spy.calls == []


@pytest.mark.parametrize(
    "amount,expected",
    [
        (Decimal("0.00"), STATUS_PAID),
        (Decimal("50.00"), STATUS_UNPAID),
        (Decimal("0.01"), STATUS_UNPAID),
        (Decimal("-5"), STATUS_PAID),
        (None, STATUS_PAID),
    ],
)
def test_derive_status(amount, expected):
    assert payments_service.derive_status(amount) == expected


def test_create_generates_distinct_prefixed_ids_and_status(fake_db):
    a = payments_service.create(PaymentItem(user_id="u1", item_type="电费", amount=Decimal("50.00")))
    b = payments_service.create(PaymentItem(user_id="u1", item_type="水费", amount=Decimal("0.00")))

    assert a.item_id.startswith("PAY_ITEM_")
    assert b.item_id.startswith("PAY_ITEM_")
    assert a.item_id != b.item_id
    assert a.item_id[len("PAY_ITEM_"):].isdigit()
    assert a.status == STATUS_UNPAID
    assert b.status == STATUS_PAID
    assert a.create_time is not None and a.create_time == a.update_time
    assert len(fake_db.tables["PAYMENT_CONFIG"]) == 2


def test_create_keeps_explicit_status(fake_db):
    created = payments_service.create(PaymentItem(user_id="u1", amount=Decimal("10"), status=STATUS_PAID))
    assert created.status == STATUS_PAID


def test_create_raises_when_insert_affects_nothing(monkeypatch):
    monkeypatch.setattr("elderly_assistant.payments.repository.insert", lambda item: False)

    with pytest.raises(PersistenceError) as exc:
        payments_service.create(PaymentItem(user_id="u1", amount=Decimal("1")))

    assert exc.value.message == "保存缴费项目失败"


def test_mark_paid_missing_item_raises_not_found(fake_db):
    with pytest.raises(NotFound) as exc:
        payments_service.mark_paid("PAY_ITEM_404")
    assert exc.value.message == "缴费项目不存在"


def test_mark_paid_settles_item(fake_db, monkeypatch):
    created = payments_service.create(PaymentItem(user_id="u1", item_type="电费", amount=Decimal("88.50")))
    monkeypatch.setattr("elderly_assistant.payments.service.now_ms", lambda: 1_700_000_000_000)

    assert payments_service.mark_paid(created.item_id) is True

    stored = payments_service.get_by_id(created.item_id)
    assert stored.status == STATUS_PAID
    assert stored.amount == 0
    assert stored.last_pay_time == 1_700_000_000_000
    assert stored.update_time == 1_700_000_000_000
    # Les autres champs ne bougent pas
    assert stored.item_type == "电费"
    assert stored.create_time == created.create_time


def test_mark_paid_returns_false_when_update_affects_nothing(monkeypatch):
    monkeypatch.setattr(
        "elderly_assistant.payments.repository.get_by_id",
        lambda item_id: PaymentItem(item_id=item_id, amount=Decimal("3")),
    )
    monkeypatch.setattr("elderly_assistant.payments.repository.update_by_id", lambda item: False)

    assert payments_service.mark_paid("PAY_ITEM_1") is False


def test_update_requires_item_id_and_refreshes_update_time(monkeypatch):
    captured = _Spy(True)
    monkeypatch.setattr("elderly_assistant.payments.repository.update_by_id", captured)
    monkeypatch.setattr("elderly_assistant.payments.service.now_ms", lambda: 42)

    with pytest.raises(InvalidArgument):
        payments_service.update(PaymentItem(user_id="u1"))

    assert payments_service.update(PaymentItem(item_id="PAY_ITEM_1", update_time=1)) is True
    (sent,), _ = captured.calls[0]
    assert sent.update_time == 42


def test_list_user_items_returns_newest_first(fake_db):
    fake_db.tables["PAYMENT_CONFIG"] = [
        {"config_id": "A", "user_id": "u1", "create_time": 1},
        {"config_id": "B", "user_id": "u1", "create_time": 3},
        {"config_id": "C", "user_id": "u2", "create_time": 2},
    ]

    items = payments_service.list_user_items("u1")

    assert [i.item_id for i in items] == ["B", "A"]


def test_delete(fake_db):
    created = payments_service.create(PaymentItem(user_id="u1", amount=Decimal("5")))
    assert payments_service.delete(created.item_id) is True
    assert payments_service.delete(created.item_id) is False


def test_list_user_items_breaks_create_time_ties_by_item_id(fake_db):
    fake_db.tables["PAYMENT_CONFIG"] = [
        {"config_id": "PAY_ITEM_3", "user_id": "u1", "create_time": 5},
        {"config_id": "PAY_ITEM_1", "user_id": "u1", "create_time": 5},
        {"config_id": "PAY_ITEM_9", "user_id": "u1", "create_time": 7},
        {"config_id": "PAY_ITEM_2", "user_id": "u1", "create_time": 5},
    ]

    first = [i.item_id for i in payments_service.list_user_items("u1")]
    fake_db.tables["PAYMENT_CONFIG"].reverse()
    second = [i.item_id for i in payments_service.list_user_items("u1")]

    assert first == ["PAY_ITEM_9", "PAY_ITEM_1", "PAY_ITEM_2", "PAY_ITEM_3"]
    assert second == first


def test_create_stores_exact_amount(fake_db):
    payments_service.create(PaymentItem(user_id="u1", amount=Decimal("0.10")))
    assert fake_db.tables["PAYMENT_CONFIG"][0]["default_amount"] == "0.10"
