"""Generic CRUD Service: lifecycle, hook ordering, fault wrapping and soft delete.

Tests:
    - Create returns the stored entity, visible through get_by_id, not deleted
    - Update/delete of a missing id raise NotFoundError without running hooks
    - Delete hides the entity from lookups but keeps the row
    - Store faults become DatabaseError; hook failures and cancellation propagate as-is
    - A failed or cancelled persist never runs the after-hook
    - A writer that lost the sku race is stopped by the store as a DatabaseError
"""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError as SAOperationalError

from crudkit.core.errors import AlreadyExistsError, DatabaseError, NotFoundError
from crudkit.models.product import Product
from crudkit.schemas.product import ProductCreate, ProductFilter, ProductUpdate
from crudkit.services.product_hooks import ProductHooks


def _create(sku="B-1", name="Bolt", price="1.50"):
    return ProductCreate(name=name, sku=sku, price=Decimal(price))


def _store_fault():
    return SAOperationalError("INSERT ...", {}, Exception("disk I/O error"))


# ─── Create ──────────────────────────────────────────────────────

async def test_create_returns_stored_entity(service):
    created = await service.create(_create())

    assert created.id is not None
    assert created.is_deleted is False
    assert created.sku == "B-1"
    fetched = await service.get_by_id(created.id)
    assert fetched is not None
    assert fetched.id == created.id


async def test_create_runs_hooks_around_persist(service, calls):
    await service.create(_create())
    assert calls == ["before_create", "add", "save", "after_create"]


async def test_create_sets_audit_timestamps(service):
    created = await service.create(_create())
    assert created.created_at is not None
    assert created.updated_at is not None


async def test_create_duplicate_sku_never_reaches_store(service, calls):
    await service.create(_create(sku="DUP"))
    calls.clear()

    with pytest.raises(AlreadyExistsError):
        await service.create(_create(sku="DUP", name="Other"))

    assert calls == ["before_create"]


async def test_create_store_fault_wrapped_as_database_error(make_service, calls):
    fault = _store_fault()
    service = make_service(fail_on="save", fault=fault)

    with pytest.raises(DatabaseError) as info:
        await service.create(_create())

    assert info.value.cause is fault
    assert info.value.__cause__ is fault
    assert "after_create" not in calls


async def test_create_cancelled_propagates_without_after_hook(make_service, calls):
    service = make_service(fail_on="save", fault=asyncio.CancelledError())

    with pytest.raises(asyncio.CancelledError):
        await service.create(_create())

    assert "after_create" not in calls


# ─── Get / List ──────────────────────────────────────────────────

async def test_get_unknown_id_returns_none(service):
    assert await service.get_by_id(424242) is None


async def test_get_store_fault_wrapped(make_service):
    service = make_service(fail_on="find_one", fault=_store_fault())
    with pytest.raises(DatabaseError):
        await service.get_by_id(1)


async def test_list_empty(service):
    assert await service.get_list(ProductFilter()) == []


async def test_list_excludes_deleted(service):
    kept = await service.create(_create(sku="A"))
    gone = await service.create(_create(sku="B"))
    await service.delete(gone.id)

    listed = await service.get_list(ProductFilter())

    assert [p.id for p in listed] == [kept.id]


async def test_list_applies_filter(service):
    await service.create(_create(sku="A", name="Hex bolt", price="2.00"))
    await service.create(_create(sku="B", name="Wing nut", price="0.40"))
    await service.create(_create(sku="C", name="Carriage bolt", price="5.00"))

    bolts = await service.get_list(ProductFilter(name="bolt"))
    cheap = await service.get_list(ProductFilter(max_price=Decimal("2.00")))

    assert {p.sku for p in bolts} == {"A", "C"}
    assert {p.sku for p in cheap} == {"A", "B"}


async def test_list_store_fault_wrapped(make_service):
    service = make_service(fail_on="find_all", fault=_store_fault())
    with pytest.raises(DatabaseError):
        await service.get_list(ProductFilter())


# ─── Update ──────────────────────────────────────────────────────

async def test_update_applies_changes(service, calls):
    created = await service.create(_create())
    calls.clear()

    updated = await service.update(created.id, ProductUpdate(name="Hex bolt", price=Decimal("2.25")))

    assert updated.id == created.id
    assert updated.name == "Hex bolt"
    assert updated.price == Decimal("2.25")
    assert updated.sku == "B-1"
    assert calls == ["before_update", "update", "save", "after_update"]


async def test_update_missing_id_raises_not_found_without_hooks(service, calls):
    with pytest.raises(NotFoundError):
        await service.update(999, ProductUpdate(name="x"))
    assert calls == []


async def test_update_deleted_entity_raises_not_found(service):
    created = await service.create(_create())
    await service.delete(created.id)
    with pytest.raises(NotFoundError):
        await service.update(created.id, ProductUpdate(name="x"))


async def test_update_to_taken_sku_rejected(service):
    await service.create(_create(sku="TAKEN"))
    other = await service.create(_create(sku="FREE"))
    with pytest.raises(AlreadyExistsError):
        await service.update(other.id, ProductUpdate(sku="TAKEN"))


async def test_update_store_fault_skips_after_hook(service, make_service, calls):
    created = await service.create(_create())
    calls.clear()
    failing = make_service(fail_on="save", fault=_store_fault())

    with pytest.raises(DatabaseError):
        await failing.update(created.id, ProductUpdate(name="x"))

    assert calls == ["before_update", "update", "save"]


async def test_update_cancelled_propagates_without_after_hook(service, make_service, calls):
    created = await service.create(_create())
    calls.clear()
    failing = make_service(fail_on="save", fault=asyncio.CancelledError())

    with pytest.raises(asyncio.CancelledError):
        await failing.update(created.id, ProductUpdate(name="x"))

    assert calls == ["before_update", "update", "save"]
    assert "after_update" not in calls


# ─── Concurrent writers ─────────────────────────────────────────

async def _sku_check_passed(self, sku, exclude_id=None):
    """A writer whose sku check ran before the winning commit landed."""
    return None


async def _active_with_sku(session, sku):
    result = await session.execute(
        select(Product).where(Product.sku == sku, Product.is_deleted.is_(False)),
    )
    return result.scalars().all()


async def test_losing_create_fails_at_the_store(service, test_db, monkeypatch, calls):
    await service.create(_create(sku="SAME"))
    monkeypatch.setattr(ProductHooks, "_ensure_sku_free", _sku_check_passed)
    calls.clear()

    with pytest.raises(DatabaseError) as info:
        await service.create(_create(sku="SAME", name="Other"))

    assert isinstance(info.value.cause, IntegrityError)
    assert "after_create" not in calls
    assert len(await _active_with_sku(test_db, "SAME")) == 1


async def test_losing_update_fails_at_the_store(service, test_db, monkeypatch):
    await service.create(_create(sku="SAME"))
    other = await service.create(_create(sku="OTHER"))
    monkeypatch.setattr(ProductHooks, "_ensure_sku_free", _sku_check_passed)

    with pytest.raises(DatabaseError) as info:
        await service.update(other.id, ProductUpdate(sku="SAME"))

    assert isinstance(info.value.cause, IntegrityError)
    assert len(await _active_with_sku(test_db, "SAME")) == 1
    assert (await service.get_by_id(other.id)).sku == "OTHER"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_is_soft(service, test_session_factory):
    created = await service.create(_create())

    await service.delete(created.id)

    assert await service.get_by_id(created.id) is None
    async with test_session_factory() as raw:
        row = await raw.get(Product, created.id)
    assert row is not None
    assert row.is_deleted is True


async def test_delete_runs_hooks_around_persist(service, calls):
    created = await service.create(_create())
    calls.clear()
    await service.delete(created.id)
    assert calls == ["before_delete", "update", "save", "after_delete"]


async def test_delete_missing_id_raises_not_found_without_hooks(service, calls):
    with pytest.raises(NotFoundError):
        await service.delete(31337)
    assert calls == []


async def test_delete_twice_raises_not_found(service):
    created = await service.create(_create())
    await service.delete(created.id)
    with pytest.raises(NotFoundError):
        await service.delete(created.id)


async def test_deleted_sku_can_be_reused(service):
    first = await service.create(_create(sku="REUSE"))
    await service.delete(first.id)

    second = await service.create(_create(sku="REUSE"))

    assert second.id != first.id


async def test_delete_cancelled_propagates_without_after_hook(service, make_service, calls):
    created = await service.create(_create())
    calls.clear()
    failing = make_service(fail_on="save", fault=asyncio.CancelledError())

    with pytest.raises(asyncio.CancelledError):
        await failing.delete(created.id)

    assert "after_delete" not in calls
