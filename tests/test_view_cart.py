"""
Tests for the saved cart inspection script
"""

import pytest

from cart_store.config import Settings
from cart_store.models import LineItem, dump_items
from cart_store.storage import FileCartStorage
from cart_store.view_cart import main


@pytest.fixture
def settings(tmp_path):
    return Settings(cart_storage_backend="file", cart_file_path=str(tmp_path / "cart.json"))


class TestViewCart:
    def test_no_saved_cart(self, settings, capsys):
        assert main(settings) == 0

        assert "No saved cart found" in capsys.readouterr().out

    def test_prints_items_and_totals(self, settings, phone, charger, capsys):
        FileCartStorage(settings.cart_file_path).write(
            dump_items([LineItem.from_variant(phone, 2), LineItem.from_variant(charger, 1)])
        )

        assert main(settings) == 0

        out = capsys.readouterr().out
        assert "Phone (Black) x2" in out
        assert "Charger (USB-C 30W) x1" in out
        assert "[1 backordered]" in out
        assert "Subtotal: 1024.50" in out

    def test_corrupt_saved_cart(self, settings, capsys):
        FileCartStorage(settings.cart_file_path).write("{oops")

        assert main(settings) == 0

        assert "corrupt" in capsys.readouterr().out

    def test_unreadable_storage(self, tmp_path, capsys):
        settings = Settings(cart_storage_backend="file", cart_file_path=str(tmp_path))

        assert main(settings) == 1

        assert "Failed to read saved cart" in capsys.readouterr().out
