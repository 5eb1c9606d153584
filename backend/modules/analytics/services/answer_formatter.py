# backend/modules/analytics/services/answer_formatter.py

"""
Answer text for the analytics assistant.

Answers are markdown-like blocks: a ``##`` heading with an emoji, then
bold labels and bullet or numbered lists. Currency figures are whole
units with Indian digit grouping and dates read like ``5 Mar 2024``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from core.formatting import format_currency, format_day, round_half_up

from ..utils.periods import as_date

Row = Dict[str, Any]

HELP_EXAMPLES = (
    "What are my top products?",
    "How many orders do I have?",
    "What is my total revenue?",
    "Show me recent orders",
    "How many customers do I have?",
    "What is my average order value?",
    "What is my highest value order?",
    "Show order status distribution",
    "Which products are low in stock?",
    "Who are my best customers?",
    "What are my sales trends?",
    "Give me a performance summary",
    "What is my fulfillment rate?",
    "Show me pending orders",
    "Who are my high-value customers?",
    "Show product category details",
    "Compare monthly sales",
    "Show quick actions",
)

QUICK_ACTIONS = (
    "Check order status",
    "View pending orders",
    "See low stock alerts",
    "Get sales reports",
    "Analyze customer data",
    "Review product performance",
)


@dataclass
class SpendSummary:
    """Revenue and order count grouped under one name (product or customer)"""

    name: str
    revenue: float = 0.0
    orders: int = 0


def signed_one_decimal(value: float) -> str:
    return f"{value:+.1f}%"


class AnswerFormatter:
    """Renders aggregated figures into assistant answers"""

    def __init__(self, currency_symbol: str = "₹"):
        self.currency_symbol = currency_symbol

    def money(self, amount: Optional[float]) -> str:
        return format_currency(amount, self.currency_symbol)

    def _order_line(self, order: Row, suffix: str) -> str:
        return (
            f"- **{order['customer']}** ordered *{order['product']}* for "
            f"{self.money(order['amount'])} on {format_day(as_date(order['date']))} ({suffix})"
        )

    def _ranked_lines(self, entries: Sequence[SpendSummary], unit: str) -> str:
        return "\n".join(
            f"{i}. **{e.name}** - {self.money(e.revenue)} ({e.orders} {unit})"
            for i, e in enumerate(entries, start=1)
        )

    def top_products(self, products: Sequence[SpendSummary]) -> str:
        if not products:
            return "No product sales data found."
        total = sum(p.revenue for p in products)
        return (
            "## 🏆 Top Selling Products\n\n"
            f"{self._ranked_lines(products, 'sales')}\n\n"
            f"**Total Revenue from Top Products:** {self.money(total)}"
        )

    def order_count(self, count: int) -> str:
        return f"## 📦 Order Count\n\nYou currently have **{count} orders** in your system."

    def total_revenue(self, total: float) -> str:
        return (
            f"## 💰 Total Revenue\n\nYour total revenue is **{self.money(total)}** "
            "across all orders."
        )

    def recent_orders(self, orders: Sequence[Row]) -> str:
        if not orders:
            return "No recent orders found."
        lines = "\n".join(self._order_line(o, f"Status: {o['status']}") for o in orders)
        return f"## 🕒 Recent Orders\n\n{lines}"

    def customer_count(self, count: int) -> str:
        return f"## 👥 Customer Count\n\nYou have **{count} customers** in your database."

    def average_order(self, average: float) -> str:
        return (
            f"## 📊 Average Order Value\n\nYour average order value is "
            f"**{self.money(average)}**."
        )

    def highest_order(self, order: Optional[Row]) -> str:
        if order is None:
            return "No orders found."
        return (
            "## 🏅 Highest Value Order\n\n"
            f"**Customer:** {order['customer']}\n"
            f"**Product:** {order['product']}\n"
            f"**Amount:** {self.money(order['amount'])}\n"
            f"**Date:** {format_day(as_date(order['date']))}"
        )

    def status_distribution(self, counts: Sequence[tuple]) -> str:
        if not counts:
            return "No orders found."
        lines = "\n".join(
            f"- {status[:1].upper()}{status[1:]}: {count} orders" for status, count in counts
        )
        return f"## 📋 Order Status Distribution\n\n{lines}"

    def low_stock(self, products: Sequence[Row], threshold: int) -> str:
        if not products:
            return (
                "## 📦 Inventory Status\n\nAll your products have healthy stock "
                f"levels ({threshold}+ units)."
            )
        lines = "\n".join(f"- **{p['name']}**: {p['stock']} units remaining" for p in products)
        return (
            "## ⚠️ Low Stock Alert\n\n"
            "The following products are running low on stock:\n\n"
            f"{lines}\n\n"
            "Consider restocking these items soon."
        )

    def best_customers(self, customers: Sequence[SpendSummary]) -> str:
        if not customers:
            return "No customer data found."
        return (
            "## 🏆 Best Customers\n\n"
            "Your top-spending customers:\n\n"
            f"{self._ranked_lines(customers, 'orders')}"
        )

    def sales_trend(self, current: float, last: float, two_ago: float) -> str:
        direction = "upward" if current > last else "downward"
        change = ""
        if last > 0:
            change = f" ({signed_one_decimal((current - last) / last * 100)})"
        return (
            "## 📈 Sales Trend Analysis\n\n"
            f"**Current Month:** {self.money(current)}\n"
            f"**Last Month:** {self.money(last)}\n"
            f"**Two Months Ago:** {self.money(two_ago)}\n\n"
            f"Sales trend is **{direction}** this month{change}."
        )

    def performance_summary(
        self,
        orders: int,
        customers: int,
        products: int,
        revenue: float,
        average: float,
    ) -> str:
        return (
            "## 📊 Business Performance Summary\n\n"
            f"- **Total Orders:** {orders}\n"
            f"- **Total Customers:** {customers}\n"
            f"- **Products in Catalog:** {products}\n"
            f"- **Total Revenue:** {self.money(revenue)}\n"
            f"- **Average Order Value:** {self.money(average)}"
        )

    def fulfillment_rate(self, completed: int, total: int) -> str:
        # Rate is shown to one decimal first, then rounded to a whole percent
        rate = float(f"{completed / total * 100:.1f}") if total else 0
        return (
            "## 📦 Order Fulfillment Rate\n\n"
            f"**Completed Orders:** {completed}\n"
            f"**Total Orders:** {total}\n"
            f"**Fulfillment Rate:** {round_half_up(rate)}%"
        )

    def pending_orders(self, orders: Sequence[Row]) -> str:
        if not orders:
            return "## ✅ No Pending Orders\n\nAll orders are fulfilled!"
        lines = "\n".join(self._order_line(o, f"ID: {o['id']}") for o in orders)
        return (
            f"## ⏳ Pending Orders\n\n{lines}\n\n"
            f"**Total Pending Orders:** {len(orders)}"
        )

    def high_value_customers(self, customers: Sequence[SpendSummary], average: float) -> str:
        if not customers:
            return (
                "## 🌟 High-Value Customers\n\nNo customers found who spent more than "
                f"the average of {self.money(average)}."
            )
        return (
            "## 🌟 High-Value Customers\n\n"
            f"Customers who spent more than the average of {self.money(average)}:\n\n"
            f"{self._ranked_lines(customers, 'orders')}"
        )

    def product_categories(self, categories: Sequence[tuple]) -> str:
        if not categories:
            return "## 📦 Product Categories\n\nNo product categories found."
        lines = "\n".join(
            f"- **{category}**: {count} products, {stock} units in stock"
            for category, count, stock in categories
        )
        return (
            f"## 📦 Product Categories\n\n{lines}\n\n"
            f"**Total Categories:** {len(categories)}"
        )

    def monthly_comparison(self, month: str, current: float, last: float) -> str:
        change = signed_one_decimal((current - last) / last * 100) if last > 0 else "N/A"
        return (
            "## 📅 Monthly Sales Comparison\n\n"
            f"**This Month ({month}):** {self.money(current)}\n"
            f"**Last Month:** {self.money(last)}\n"
            f"**Change:** {change}"
        )

    def quick_actions(self) -> str:
        actions = "\n".join(f"• {action}" for action in QUICK_ACTIONS)
        return (
            "## ⚡ Quick Actions\n\n"
            "I can help you with these quick actions:\n\n"
            f"{actions}\n\n"
            "Just ask me what you'd like to do!"
        )

    def help(self) -> str:
        examples = "\n".join(f'• "{example}"' for example in HELP_EXAMPLES)
        return (
            "## ❓ Help\n\n"
            "I can help you with information about your business. "
            "Try asking questions like:\n\n"
            f"{examples}"
        )


def rank_by_revenue(summaries: List[SpendSummary], limit: int) -> List[SpendSummary]:
    """Highest revenue first; ties keep their incoming order."""
    return sorted(summaries, key=lambda s: s.revenue, reverse=True)[:limit]
