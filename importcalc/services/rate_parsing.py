"""Extract RUB rates from the bank's exchange page.

The page layout is not under our control, so extraction is a chain of
independent strategies tried in order:

``transfer_tab``
    The "для денежных переводов" tab (money transfer rates, sell side).
``legacy_tab``
    The same table located by the old ``id="currencyTab4"`` marker.
``hidden_inputs``
    Hidden ``usd1``/``usd2``-style form fields.
``json_valute``
    JSON documents keyed by currency code with ``Value``/``Nominal`` pairs,
    as served by the alternate (CBR-style) deployment.

Every strategy returns either a complete mapping ``{code: Decimal}`` that
includes ``RUB = 1`` or ``None``. HTML strategies work on the DOM built by
BeautifulSoup, one ``currency-table__row`` at a time.
"""

from __future__ import annotations

import json
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from importcalc.errors import ParseFailed
from importcalc.models.constants import QUOTED_CURRENCY_CODES
from importcalc.models.snapshot import has_all_rates

logger = logging.getLogger(__name__)

Rates = Dict[str, Decimal]
Strategy = Callable[[str], Optional[Rates]]

HTML_PARSER = "lxml"
TRANSFER_LABEL = "для денежных переводов"
LEGACY_TAB_ID = "currencyTab4"
TAB_CLASS = "currency-tabs__item"
TABLE_CLASS = "currency-table"
SELL_HEAD = "продажа"
# JPY is quoted per 100 yen on the page
JPY_QUOTE_UNITS = Decimal("100")
# Hidden JPY values at or below this are per 1 yen, not per 100
JPY_PER_UNIT_THRESHOLD = Decimal("5")

_TAB_ID_RE = re.compile(r"currencyTab\d+", re.IGNORECASE)
_SEPARATORS_RE = re.compile(r"\s+")
_NUMBER_RE = re.compile(r"\d[\d\s.,]*")


def parse_number(text: Any) -> Optional[Decimal]:
    """Parse ``"1 234,56"`` / ``"92.10"`` style numbers into ``Decimal``.

    Returns ``None`` for empty, malformed, non-finite or non-positive input.
    """
    if text is None or isinstance(text, bool):
        return None
    cleaned = _SEPARATORS_RE.sub("", str(text)).replace(",", ".")
    if not cleaned or cleaned.count(".") > 1:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def _has_class(el: Tag, name: str) -> bool:
    return name in (el.get("class") or ())


def _is_tab_boundary(el: Tag) -> bool:
    return _has_class(el, TAB_CLASS) or bool(_TAB_ID_RE.fullmatch(el.get("id") or ""))


def _holds_label(el: Tag) -> bool:
    return any(TRANSFER_LABEL in s.lower() for s in el.find_all(string=True, recursive=False))


def _number_after(head: Tag) -> Optional[Decimal]:
    """Read the figure that follows a ``currency-table__head`` cell.

    Anything after the figure (a currency sign, a unit) is ignored.
    """
    parts = []
    for sibling in head.next_siblings:
        parts.append(sibling.get_text(" ") if isinstance(sibling, Tag) else str(sibling))
    match = _NUMBER_RE.search("".join(parts))
    if not match:
        return None
    return parse_number(match.group().strip().rstrip(".,"))


def _row_sell(row: Tag) -> Optional[Decimal]:
    for head in row.select(".currency-table__head"):
        if head.get_text(strip=True).lower() == SELL_HEAD:
            return _number_after(head)
    return None


def sale_rates_from_table(table: Tag) -> Dict[str, Optional[Decimal]]:
    """Return ``{code: sell quote}`` for each quoted currency row of ``table``.

    A code whose row is absent or has no readable sell value maps to ``None``;
    values are never taken from a neighbouring row.
    """
    found: Dict[str, Optional[Decimal]] = {code: None for code in QUOTED_CURRENCY_CODES}
    for row in table.select(".currency-table__row"):
        cell = row.select_one(".currency-table__val")
        if cell is None:
            continue
        code = cell.get_text(strip=True).upper()
        if code in found and found[code] is None:
            found[code] = _row_sell(row)
    return found


def _rates_from_table(table: Tag) -> Optional[Rates]:
    found = sale_rates_from_table(table)
    usd, eur, jpy_per_100 = found["USD"], found["EUR"], found["JPY"]
    if usd is None or eur is None or jpy_per_100 is None:
        return None
    return _complete({"USD": usd, "EUR": eur, "JPY": jpy_per_100 / JPY_QUOTE_UNITS})


def _complete(rates: Rates) -> Optional[Rates]:
    rates = dict(rates)
    rates["RUB"] = Decimal("1")
    return rates if has_all_rates(rates) else None


def _section_tables(anchor: Tag) -> List[Tag]:
    """Rate tables belonging to the section that starts at ``anchor``.

    Tables nested in ``anchor`` win; otherwise the document is scanned forward
    up to the next tab boundary or the next transfer label.
    """
    tables = anchor.select(f".{TABLE_CLASS}")
    if tables:
        return tables
    for el in anchor.find_all_next(True):
        if _is_tab_boundary(el) or _holds_label(el):
            break
        if _has_class(el, TABLE_CLASS):
            return [el]
    return []


def transfer_sections(html: str) -> List[Tag]:
    """Return the rate tables that follow each transfer-tab label.

    The label can occur several times (tab navigation, headings). A label
    inside a ``currency-tabs__item`` owns that tab's tables; a label outside
    any tab owns the first table before the next tab boundary, if any.
    """
    soup = _soup(html)
    tables: List[Tag] = []
    for label in soup.find_all(string=lambda s: TRANSFER_LABEL in s.lower()):
        anchor = label.find_parent(class_=TAB_CLASS) or label.parent
        if anchor is None:
            continue
        for table in _section_tables(anchor):
            if not any(table is seen for seen in tables):
                tables.append(table)
    return tables


def parse_transfer_tab(html: str) -> Optional[Rates]:
    for table in transfer_sections(html):
        rates = _rates_from_table(table)
        if rates is not None:
            return rates
    return None


def parse_legacy_tab(html: str) -> Optional[Rates]:
    tab = _soup(html).find(id=LEGACY_TAB_ID)
    if tab is None:
        return None
    for table in _section_tables(tab):
        rates = _rates_from_table(table)
        if rates is not None:
            return rates
    return None


def _hidden_value(soup: BeautifulSoup, name: str) -> Optional[Decimal]:
    field = soup.find(attrs={"name": re.compile(rf"^{name}$", re.IGNORECASE)})
    if field is None:
        return None
    return parse_number(field.get("value"))


def _hidden_pair(soup: BeautifulSoup, prefix: str) -> Optional[Decimal]:
    second = _hidden_value(soup, f"{prefix}2")
    return second if second is not None else _hidden_value(soup, f"{prefix}1")


def normalize_jpy_per_hundred(value: Decimal) -> Decimal:
    """Return a JPY quote expressed per 100 yen.

    Values at or below :data:`JPY_PER_UNIT_THRESHOLD` are taken to be per one
    yen and scaled up; anything larger is already per 100.
    """
    if value <= JPY_PER_UNIT_THRESHOLD:
        return value * JPY_QUOTE_UNITS
    return value


def parse_hidden_inputs(html: str) -> Optional[Rates]:
    soup = _soup(html)
    usd = _hidden_pair(soup, "usd")
    eur = _hidden_pair(soup, "eur")
    jpy_raw = _hidden_pair(soup, "jpy")
    if usd is None or eur is None or jpy_raw is None:
        return None
    jpy = normalize_jpy_per_hundred(jpy_raw) / JPY_QUOTE_UNITS
    return _complete({"USD": usd, "EUR": eur, "JPY": jpy})


def parse_json_valute(document: str) -> Optional[Rates]:
    text = document.lstrip()
    if not text.startswith("{"):
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    valute = data.get("Valute", data)
    if not isinstance(valute, dict):
        return None
    rates: Rates = {}
    for code in QUOTED_CURRENCY_CODES:
        entry = valute.get(code)
        if not isinstance(entry, dict):
            return None
        value = parse_number(entry.get("Value"))
        nominal = parse_number(entry.get("Nominal", 1))
        if value is None or nominal is None:
            return None
        rates[code] = value / nominal  # RUB per 1 unit
    return _complete(rates)


EXTRACTION_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("transfer_tab", parse_transfer_tab),
    ("legacy_tab", parse_legacy_tab),
    ("hidden_inputs", parse_hidden_inputs),
    ("json_valute", parse_json_valute),
)


def extract_rates(
    document: str,
    strategies: Tuple[Tuple[str, Strategy], ...] = EXTRACTION_STRATEGIES,
) -> Tuple[str, Rates]:
    """Run the strategy chain and return ``(strategy_name, rates)``.

    :raises ParseFailed: if no strategy yields all supported codes
    """
    for name, strategy in strategies:
        rates = strategy(document)
        if rates is not None:
            return name, rates
        logger.debug("Rate strategy %s found nothing", name)
    raise ParseFailed("Transfer rates not found or malformed")


__all__ = [
    "EXTRACTION_STRATEGIES",
    "JPY_PER_UNIT_THRESHOLD",
    "extract_rates",
    "normalize_jpy_per_hundred",
    "parse_hidden_inputs",
    "parse_json_valute",
    "parse_legacy_tab",
    "parse_number",
    "sale_rates_from_table",
    "parse_transfer_tab",
    "transfer_sections",
]
