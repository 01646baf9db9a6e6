from decimal import Decimal

from display.states import ItemAdded, Total, Welcome, center_line, state_for_cart
from pricing.types import CartLine


class TestLines:
    def test_center_line_puts_odd_space_on_the_right(self):
        assert center_line("TOTAL", 20) == "       TOTAL        "

    def test_center_line_truncates_first(self):
        assert center_line("A very long shop name here", 20) == "A very long shop nam"

    def test_welcome(self):
        line1, line2 = Welcome("Corner Grill", "Welcome!").lines(20)
        assert line1 == "    Corner Grill    "
        assert line2 == "      Welcome!      "

    def test_item_added(self):
        line1, line2 = ItemAdded("Burger", Decimal("6.99"), Decimal("13.84")).lines(20)
        assert line1 == "Burger         $6.99"
        assert line2 == "Total:        $13.84"
        assert len(line1) == len(line2) == 20

    def test_item_added_truncates_long_names(self):
        line1, _ = ItemAdded("Mixed Grill Platter Large", "24.50", "24.50").lines(20)
        assert line1 == "Mixed Grill P $24.50"
        assert len(line1) == 20

    def test_total(self):
        assert Total("13.8402").lines(20) == ("       TOTAL        ", "Total:        $13.84")

    def test_symbol(self):
        assert Total("5").lines(20, symbol="£")[1] == "Total:" + " " * 9 + "£5.00"

    def test_every_state_is_two_full_width_lines(self):
        for state in (Welcome("x" * 30, ""), ItemAdded("y" * 30, "1", "1"), Total("123456.78")):
            assert [len(line) for line in state.lines(20)] == [20, 20]


class TestStateForCart:
    def test_empty_cart_shows_welcome(self):
        welcome = Welcome("Corner Grill", "Welcome!")
        assert state_for_cart([], welcome=welcome) is welcome

    def test_added_line(self):
        line = CartLine(product_id="b", name="Burger", unit_base_price="6.99", quantity=2)
        state = state_for_cart([line], added_line=line, running_total=Decimal("13.98"))
        assert state == ItemAdded("Burger", "13.98", "13.98")

    def test_other_changes_show_total(self):
        line = CartLine(product_id="b", name="Burger", unit_base_price="6.99")
        assert state_for_cart([line], running_total=Decimal("6.99")) == Total("6.99")
