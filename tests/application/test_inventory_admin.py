"""Integration tests for the inventory management use cases."""

import pytest

from labstock.application.add_item import AddItemHandler
from labstock.application.delete_item import DeleteItemHandler
from labstock.application.show_inventory import ShowInventoryHandler
from labstock.application.update_item import UpdateItemHandler
from labstock.domain.events import EventPublisher
from labstock.domain.exceptions import EntityNotFoundError, Forbidden, ValidationError
from labstock.domain.model.user import Role
from labstock.domain.service.write_guard import WriteGuard
from tests.fakes import (
    FakeInventoryRepository,
    RecordingSubscriber,
    make_item,
    make_user,
)

ADVISOR = make_user(Role.ADVISOR, "Alan", "Turing")
PLAIN_USER = make_user()


def _setup(*items):
    inventory_repo = FakeInventoryRepository(list(items))
    recorder = RecordingSubscriber()
    publisher = EventPublisher([recorder])
    guard = WriteGuard()
    return (
        AddItemHandler(inventory_repo, publisher),
        UpdateItemHandler(inventory_repo, publisher, guard),
        DeleteItemHandler(inventory_repo, publisher, guard),
        ShowInventoryHandler(inventory_repo),
        inventory_repo,
        recorder,
    )


class TestAddItem:

    def test_advisor_adds_item(self):
        add, _, _, _, inventory_repo, recorder = _setup()

        dto = add.handle(ADVISOR, " Multimeter ", "Tools", quantity=4, min_quantity=1)

        assert dto.name == "Multimeter"
        assert dto.quantity == 4
        assert inventory_repo.get_by_id(dto.id).created_by == ADVISOR.id
        assert recorder.actions == ["INVENTORY_CREATE"]

    def test_plain_user_forbidden(self):
        add, _, _, _, inventory_repo, _ = _setup()
        with pytest.raises(Forbidden):
            add.handle(PLAIN_USER, "Multimeter", "Tools")
        assert inventory_repo.list_all() == []

    def test_negative_quantity_rejected(self):
        add, _, _, _, _, recorder = _setup()
        with pytest.raises(ValidationError):
            add.handle(ADVISOR, "Multimeter", "Tools", quantity=-1)
        assert recorder.events == []


class TestUpdateItem:

    def test_edit_quantity_and_location(self):
        _, update, _, _, inventory_repo, recorder = _setup(make_item(quantity=5))

        dto = update.handle(ADVISOR, "item-1", {"quantity": 12, "location": "B2"})

        assert dto.quantity == 12
        assert inventory_repo.get_by_id("item-1").location == "B2"
        assert recorder.events[-1].metadata["fields"] == ["location", "quantity"]

    def test_nothing_to_update(self):
        _, update, _, _, _, _ = _setup(make_item())
        with pytest.raises(ValidationError, match="Nothing to update"):
            update.handle(ADVISOR, "item-1", {})

    def test_unknown_field_rejected(self):
        _, update, _, _, inventory_repo, _ = _setup(make_item(quantity=5))
        with pytest.raises(ValidationError, match="Cannot edit"):
            update.handle(ADVISOR, "item-1", {"quantity": 1, "id": "other"})
        assert inventory_repo.get_by_id("item-1").quantity == 5

    def test_missing_item(self):
        _, update, _, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            update.handle(ADVISOR, "nope", {"quantity": 1})

    def test_plain_user_forbidden(self):
        _, update, _, _, _, _ = _setup(make_item())
        with pytest.raises(Forbidden):
            update.handle(PLAIN_USER, "item-1", {"quantity": 100})


class TestDeleteItem:

    def test_delete(self):
        _, _, delete, _, inventory_repo, recorder = _setup(make_item())
        delete.handle(ADVISOR, "item-1")
        assert inventory_repo.get_by_id("item-1") is None
        assert recorder.actions == ["INVENTORY_DELETE"]

    def test_delete_missing(self):
        _, _, delete, _, _, recorder = _setup()
        with pytest.raises(EntityNotFoundError):
            delete.handle(ADVISOR, "item-1")
        assert recorder.events == []


class TestShowInventory:

    def test_low_stock_filter(self):
        items = (
            make_item(quantity=2, item_id="low", name="Resistor", min_quantity=2),
            make_item(quantity=50, item_id="ok", name="Wire", min_quantity=2),
            make_item(quantity=0, item_id="untracked", name="Glue", min_quantity=0),
        )
        _, _, _, show, _, _ = _setup(*items)

        assert {line.id for line in show.handle()} == {"low", "ok", "untracked"}
        assert [line.id for line in show.handle(low_stock_only=True)] == ["low"]
