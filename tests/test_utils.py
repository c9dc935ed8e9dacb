import datetime
from decimal import Decimal

from invoices.utils import GAP, format_currency, format_date_to_local, generate_pagination, to_cents


class TestCents:
    def test_exact_amount(self):
        assert to_cents(Decimal("12.34")) == 1234

    def test_rounds_half_up(self):
        assert to_cents(Decimal("12.345")) == 1235
        assert to_cents(Decimal("0.005")) == 1


class TestFormatting:
    def test_format_currency(self):
        assert format_currency(123456) == "$1,234.56"
        assert format_currency(0) == "$0.00"

    def test_format_date_to_local(self):
        assert format_date_to_local("2022-12-06") == "Dec 6, 2022"
        assert format_date_to_local(datetime.date(2023, 6, 17)) == "Jun 17, 2023"


class TestPagination:
    def test_short_listing_shows_every_page(self):
        assert generate_pagination(1, 3) == [1, 2, 3]
        assert generate_pagination(1, 0) == []

    def test_near_start(self):
        assert generate_pagination(2, 10) == [1, 2, 3, GAP, 9, 10]

    def test_near_end(self):
        assert generate_pagination(9, 10) == [1, 2, GAP, 8, 9, 10]

    def test_middle(self):
        assert generate_pagination(5, 10) == [1, GAP, 4, 5, 6, GAP, 10]
