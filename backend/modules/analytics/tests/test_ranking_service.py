# backend/modules/analytics/tests/test_ranking_service.py

from datetime import date, datetime

from modules.analytics.services.ranking_service import RankingService, rank_top_products
from tests.factories import OrderFactory

NOW = datetime(2024, 3, 20, 9, 0)


def sale(product, amount, day):
    return {"product": product, "amount": amount, "date": day}


class TestRankTopProducts:
    def test_at_most_five_sorted_by_revenue(self):
        orders = [sale(f"P{i}", 10.0 * (i + 1), date(2024, 3, 1)) for i in range(7)]

        top = rank_top_products(orders, NOW, limit=5)

        assert len(top) == 5
        revenues = [p.revenue for p in top]
        assert revenues == sorted(revenues, reverse=True)
        assert top[0].name == "P6"

    def test_sales_count_and_rounded_revenue(self):
        orders = [sale("Tea", 10.4, date(2024, 3, 1)), sale("Tea", 10.4, date(2024, 3, 2))]

        (tea,) = rank_top_products(orders, NOW, limit=5)

        assert tea.sales == 2
        assert tea.revenue == 21

    def test_change_against_previous_month(self):
        orders = [
            sale("Tea", 150.0, date(2024, 3, 3)),
            sale("Tea", 100.0, date(2024, 2, 29)),
            sale("Coffee", 80.0, date(2024, 3, 4)),
            sale("Coffee", 100.0, date(2024, 2, 1)),
        ]

        top = {p.name: p.change for p in rank_top_products(orders, NOW, limit=5)}

        assert top == {"Tea": "+50%", "Coffee": "-20%"}

    def test_no_previous_revenue_is_plain_zero_percent(self):
        top = rank_top_products([sale("Tea", 10.0, date(2024, 3, 1))], NOW, limit=5)

        assert top[0].change == "0%"

    def test_window_runs_from_first_of_month_through_today(self):
        orders = [
            sale("Future", 999.0, date(2024, 3, 21)),
            sale("Old", 999.0, date(2024, 1, 31)),
            sale("LastMonthOnly", 999.0, date(2024, 2, 15)),
            sale("Today", 5.0, date(2024, 3, 20)),
        ]

        top = rank_top_products(orders, NOW, limit=5)

        assert [p.name for p in top] == ["Today"]

    def test_ties_keep_first_appearance(self):
        orders = [
            sale("B", 50.0, date(2024, 3, 2)),
            sale("A", 50.0, date(2024, 3, 1)),
            sale("C", 60.0, date(2024, 3, 3)),
        ]

        assert [p.name for p in rank_top_products(orders, NOW, limit=5)] == ["C", "B", "A"]


def test_ranking_service_reads_orders_from_store(store):
    OrderFactory(product="Tea", amount=120.0, date=date(2024, 3, 10))
    OrderFactory(product="Tea", amount=60.0, date=date(2024, 2, 10))

    top = RankingService(store, limit=5).get_top_products(now=NOW)

    assert len(top) == 1
    assert top[0].model_dump(by_alias=True) == {
        "name": "Tea",
        "sales": 1,
        "revenue": 120,
        "change": "+100%",
    }
