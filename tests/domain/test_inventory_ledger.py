"""Unit tests for the InventoryLedger domain service."""

import pytest

from labstock.domain.exceptions import EntityNotFoundError, InsufficientStock
from labstock.domain.service.inventory_ledger import InventoryLedger
from labstock.domain.service.write_guard import WriteGuard
from tests.fakes import FakeInventoryRepository, make_item


def _ledger(*items) -> tuple[InventoryLedger, FakeInventoryRepository]:
    repo = FakeInventoryRepository(list(items))
    return InventoryLedger(repo, WriteGuard()), repo


class TestReserve:

    def test_reserve_persists_new_quantity(self):
        ledger, repo = _ledger(make_item(quantity=10))
        assert ledger.reserve("item-1", 3) == 7
        assert repo.get_by_id("item-1").quantity == 7

    def test_insufficient_stock_leaves_store_untouched(self):
        ledger, repo = _ledger(make_item(quantity=2))
        with pytest.raises(InsufficientStock):
            ledger.reserve("item-1", 3)
        assert repo.get_by_id("item-1").quantity == 2

    def test_missing_item(self):
        ledger, _ = _ledger()
        with pytest.raises(EntityNotFoundError, match="not found"):
            ledger.reserve("nope", 1)

    def test_reads_fresh_quantity_each_time(self):
        ledger, repo = _ledger(make_item(quantity=10))

        # Someone edits the stock directly between two reservations.
        item = repo.get_by_id("item-1")
        item.apply_edit(quantity=4)
        repo.save(item)

        with pytest.raises(InsufficientStock):
            ledger.reserve("item-1", 5)
        assert ledger.reserve("item-1", 4) == 0


class TestRestore:

    def test_restore_persists_new_quantity(self):
        ledger, repo = _ledger(make_item(quantity=7))
        assert ledger.restore("item-1", 3) == 10
        assert repo.get_by_id("item-1").quantity == 10

    def test_restore_missing_item(self):
        ledger, _ = _ledger()
        with pytest.raises(EntityNotFoundError):
            ledger.restore("nope", 1)

    def test_restore_if_present_skips_deleted_item(self):
        ledger, _ = _ledger()
        assert ledger.restore_if_present("nope", 3) is None


class TestCheckAvailable:

    def test_returns_item_when_enough(self):
        ledger, _ = _ledger(make_item(quantity=5))
        assert ledger.check_available("item-1", 5).name == "Arduino Uno"

    def test_raises_when_short(self):
        ledger, repo = _ledger(make_item(quantity=5))
        with pytest.raises(InsufficientStock, match="available 5"):
            ledger.check_available("item-1", 6)
        assert repo.get_by_id("item-1").quantity == 5
