"""Service test fixtures: recording hooks and an entity set with injectable faults.

Invariants:
    - `calls` records hook invocations and store writes in the order they happen
    - FaultyEntitySet raises the configured fault from the named method only
"""

import pytest

from crudkit.infrastructure.entity_set import SqlAlchemyEntitySet
from crudkit.models.product import Product
from crudkit.services.crud_service import CrudService
from crudkit.services.product_hooks import ProductHooks


class RecordingEntitySet(SqlAlchemyEntitySet):
    def __init__(self, session, model, calls, fail_on=None, fault=None):
        super().__init__(session, model)
        self.calls = calls
        self.fail_on = fail_on
        self.fault = fault

    def _maybe_fail(self, method):
        if method == self.fail_on:
            raise self.fault

    async def find_one(self, *criteria):
        self._maybe_fail("find_one")
        return await super().find_one(*criteria)

    async def find_all(self, *criteria):
        self._maybe_fail("find_all")
        return await super().find_all(*criteria)

    async def add(self, entity):
        self.calls.append("add")
        self._maybe_fail("add")
        await super().add(entity)

    async def update(self, entity):
        self.calls.append("update")
        self._maybe_fail("update")
        await super().update(entity)

    async def save(self):
        self.calls.append("save")
        self._maybe_fail("save")
        await super().save()


class RecordingHooks(ProductHooks):
    def __init__(self, entity_set, calls):
        super().__init__(entity_set)
        self.calls = calls

    async def before_create(self, create):
        self.calls.append("before_create")
        return await super().before_create(create)

    async def after_create(self, entity):
        self.calls.append("after_create")

    async def before_update(self, update, entity):
        self.calls.append("before_update")
        await super().before_update(update, entity)

    async def after_update(self, entity):
        self.calls.append("after_update")

    async def before_delete(self, entity):
        self.calls.append("before_delete")

    async def after_delete(self, entity):
        self.calls.append("after_delete")


@pytest.fixture
def calls():
    return []


@pytest.fixture
def make_service(test_db, calls):
    """Build a CrudService over Product, optionally failing one store method."""
    def _make(fail_on=None, fault=None):
        entity_set = RecordingEntitySet(test_db, Product, calls, fail_on, fault)
        hooks = RecordingHooks(entity_set, calls)
        return CrudService(entity_set, hooks)
    return _make


@pytest.fixture
def service(make_service):
    return make_service()
