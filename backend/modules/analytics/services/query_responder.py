# backend/modules/analytics/services/query_responder.py

"""
Keyword-driven business assistant.

A query is lower-cased and matched against an ordered table of intent
rules. The first rule whose matcher accepts the text answers it; when
none does, a help block listing example questions is returned.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from core.config import Settings, get_settings
from modules.catalog.models.catalog_models import OrderStatus
from modules.catalog.services.store import DashboardStore

from ..constants import ASSISTANT_TOP_N, COMPLETED_STATUSES
from ..exceptions import DuplicateIntentError, InvalidQueryError
from ..utils.periods import as_date, month_key, month_name, month_start
from .answer_formatter import AnswerFormatter, SpendSummary, rank_by_revenue

logger = logging.getLogger(__name__)

Matcher = Callable[[str], bool]
Handler = Callable[[datetime], str]


def contains_all(*words: str) -> Matcher:
    return lambda text: all(word in text for word in words)


def contains_any(*words: str) -> Matcher:
    return lambda text: any(word in text for word in words)


def both(first: Matcher, second: Matcher) -> Matcher:
    return lambda text: first(text) and second(text)


@dataclass(frozen=True)
class IntentRule:
    """One assistant intent; lower priority values are tried first"""

    name: str
    priority: int
    matcher: Matcher
    handler: Handler

    def matches(self, text: str) -> bool:
        return self.matcher(text)


class QueryResponder:
    """Answers free-text business questions from the live tables"""

    def __init__(self, store: DashboardStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or get_settings()
        self.formatter = AnswerFormatter(self.settings.currency_symbol)
        self._rules: List[IntentRule] = []
        self._register_default_rules()

    def register(self, name: str, priority: int, matcher: Matcher, handler: Handler):
        """Add an intent rule. Rules sharing a priority keep registration order."""
        if any(rule.name == name for rule in self._rules):
            raise DuplicateIntentError(name)
        self._rules.append(IntentRule(name, priority, matcher, handler))

    @property
    def rules(self) -> List[IntentRule]:
        return sorted(self._rules, key=lambda rule: rule.priority)

    def _register_default_rules(self):
        order = contains_any("order")
        counted = contains_any("count", "how many")

        self.register("top_products", 10, contains_all("top", "product"), self._top_products)
        self.register("order_count", 20, both(order, counted), self._order_count)
        self.register("total_revenue", 30, contains_all("total", "revenue"), self._total_revenue)
        self.register("recent_orders", 40, contains_all("recent", "order"), self._recent_orders)
        self.register(
            "customer_count", 50, both(contains_any("customer"), counted), self._customer_count
        )
        self.register("average_order", 60, contains_all("average", "order"), self._average_order)
        self.register("highest_order", 70, contains_all("highest", "order"), self._highest_order)
        self.register(
            "status_distribution",
            80,
            both(contains_any("status", "distribution"), order),
            self._status_distribution,
        )
        self.register("low_stock", 90, contains_all("product", "stock"), self._low_stock)
        self.register(
            "best_customers",
            100,
            both(contains_any("best", "top"), contains_any("customer")),
            self._best_customers,
        )
        self.register(
            "sales_trend",
            110,
            both(
                contains_any("sales", "revenue"),
                contains_any("trend", "last month", "growth"),
            ),
            self._sales_trend,
        )
        self.register(
            "performance_summary",
            120,
            contains_any("performance", "summary", "overview", "report"),
            self._performance_summary,
        )
        self.register(
            "fulfillment_rate", 130, contains_all("fulfillment", "rate"), self._fulfillment_rate
        )
        self.register("pending_orders", 140, contains_all("pending", "order"), self._pending_orders)
        self.register(
            "high_value_customers",
            150,
            contains_all("high", "value", "customer"),
            self._high_value_customers,
        )
        self.register(
            "product_categories",
            160,
            contains_all("category", "product"),
            self._product_categories,
        )
        self.register(
            "monthly_comparison",
            170,
            both(contains_any("monthly"), contains_any("sales", "revenue")),
            self._monthly_comparison,
        )
        self.register(
            "quick_actions",
            180,
            contains_all("quick", "action"),
            lambda now: self.formatter.quick_actions(),
        )

    def match(self, text: str) -> Optional[IntentRule]:
        for rule in self.rules:
            if rule.matches(text):
                return rule
        return None

    def answer(self, query: Any, now: Optional[datetime] = None) -> str:
        if not isinstance(query, str) or not query:
            raise InvalidQueryError(query)

        text = query.lower().strip()
        rule = self.match(text)
        if rule is None:
            logger.debug(f"No intent matched query: {text!r}")
            return self.formatter.help()

        logger.debug(f"Query {text!r} matched intent {rule.name}")
        return rule.handler(now or datetime.now())

    # Aggregation helpers

    def _spend_by(self, key: str) -> List[SpendSummary]:
        """Order revenue and count grouped by ``key``, in first-seen order."""
        summaries: Dict[str, SpendSummary] = {}
        for order in self.store.list_orders(fields=[key, "amount"]):
            summary = summaries.setdefault(order[key], SpendSummary(order[key]))
            summary.revenue += order["amount"] or 0.0
            summary.orders += 1
        return list(summaries.values())

    def _revenue_between(self, start, end=None) -> float:
        """Revenue for orders dated on or after ``start`` and before ``end``."""
        total = 0.0
        for order in self.store.list_orders(fields=["amount", "date"]):
            day = as_date(order["date"])
            if day >= start and (end is None or day < end):
                total += order["amount"] or 0.0
        return total

    def _revenue_in_month(self, key: str) -> float:
        return sum(
            order["amount"] or 0.0
            for order in self.store.list_orders(fields=["amount", "date"])
            if month_key(order["date"]) == key
        )

    def _order_amounts(self) -> List[float]:
        return [o["amount"] or 0.0 for o in self.store.list_orders(fields=["amount"])]

    # Intent handlers

    def _top_products(self, now: datetime) -> str:
        top = rank_by_revenue(self._spend_by("product"), ASSISTANT_TOP_N)
        return self.formatter.top_products(top)

    def _order_count(self, now: datetime) -> str:
        return self.formatter.order_count(len(self.store.list_orders(fields=["id"])))

    def _total_revenue(self, now: datetime) -> str:
        return self.formatter.total_revenue(sum(self._order_amounts()))

    def _recent_orders(self, now: datetime) -> str:
        orders = self.store.list_orders(
            fields=["id", "customer", "product", "amount", "status", "date"],
            limit=ASSISTANT_TOP_N,
            order_by="date",
        )
        return self.formatter.recent_orders(orders)

    def _customer_count(self, now: datetime) -> str:
        return self.formatter.customer_count(len(self.store.list_customers(fields=["id"])))

    def _average_order(self, now: datetime) -> str:
        amounts = self._order_amounts()
        average = sum(amounts) / len(amounts) if amounts else 0
        return self.formatter.average_order(average)

    def _highest_order(self, now: datetime) -> str:
        orders = self.store.list_orders(
            fields=["customer", "product", "amount", "date"], limit=1, order_by="amount"
        )
        return self.formatter.highest_order(orders[0] if orders else None)

    def _status_distribution(self, now: datetime) -> str:
        counts = Counter(o["status"] for o in self.store.list_orders(fields=["status"]))
        return self.formatter.status_distribution(sorted(counts.items()))

    def _low_stock(self, now: datetime) -> str:
        threshold = self.settings.low_stock_threshold
        products = [
            p
            for p in self.store.list_products(fields=["name", "stock"], order_by="stock")
            if (p["stock"] or 0) < threshold
        ]
        return self.formatter.low_stock(products[:ASSISTANT_TOP_N], threshold)

    def _best_customers(self, now: datetime) -> str:
        top = rank_by_revenue(self._spend_by("customer"), ASSISTANT_TOP_N)
        return self.formatter.best_customers(top)

    def _sales_trend(self, now: datetime) -> str:
        current_start = month_start(now)
        last_start = month_start(now, -1)
        two_ago_start = month_start(now, -2)

        return self.formatter.sales_trend(
            current=self._revenue_between(current_start),
            last=self._revenue_between(last_start, current_start),
            two_ago=self._revenue_between(two_ago_start, last_start),
        )

    def _performance_summary(self, now: datetime) -> str:
        amounts = self._order_amounts()
        revenue = sum(amounts)
        return self.formatter.performance_summary(
            orders=len(amounts),
            customers=len(self.store.list_customers(fields=["id"])),
            products=len(self.store.list_products(fields=["id"])),
            revenue=revenue,
            average=revenue / len(amounts) if amounts else 0,
        )

    def _fulfillment_rate(self, now: datetime) -> str:
        statuses = [o["status"] for o in self.store.list_orders(fields=["status"])]
        completed = sum(1 for status in statuses if status in COMPLETED_STATUSES)
        return self.formatter.fulfillment_rate(completed, len(statuses))

    def _pending_orders(self, now: datetime) -> str:
        orders = [
            o
            for o in self.store.list_orders(
                fields=["id", "customer", "product", "amount", "status", "date"],
                order_by="date",
            )
            if o["status"] == OrderStatus.PENDING.value
        ]
        return self.formatter.pending_orders(orders)

    def _high_value_customers(self, now: datetime) -> str:
        spend = self._spend_by("customer")
        average = sum(s.revenue for s in spend) / len(spend) if spend else 0.0
        above = [s for s in spend if s.revenue > average]
        return self.formatter.high_value_customers(
            rank_by_revenue(above, ASSISTANT_TOP_N), average
        )

    def _product_categories(self, now: datetime) -> str:
        counts: Dict[str, int] = Counter()
        stock: Dict[str, int] = defaultdict(int)
        for product in self.store.list_products(fields=["category", "stock"]):
            counts[product["category"]] += 1
            stock[product["category"]] += product["stock"] or 0

        # Counter.most_common keeps first-seen order among equal counts
        categories = [(name, count, stock[name]) for name, count in counts.most_common()]
        return self.formatter.product_categories(categories)

    def _monthly_comparison(self, now: datetime) -> str:
        return self.formatter.monthly_comparison(
            month_name(now),
            current=self._revenue_in_month(month_key(now)),
            last=self._revenue_in_month(month_key(month_start(now, -1))),
        )
