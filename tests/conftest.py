from datetime import date
from decimal import Decimal
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from importcalc.models import RateSnapshot


def _row(code, buy, sell):
    return (
        '<div class="currency-table__row">'
        f'<div class="currency-table__val">{code}</div>'
        '<div class="currency-table__col">'
        f'<div class="currency-table__head">покупка</div> {buy}'
        '</div>'
        '<div class="currency-table__col">'
        f'<div class="currency-table__head">продажа</div> {sell}'
        '</div>'
        '</div>'
    )


def _table(usd, eur, jpy):
    """``usd``/``eur``/``jpy`` are ``(buy, sell)`` string pairs; JPY per 100."""
    return (
        '<div class="currency-table">'
        + _row("USD", *usd)
        + _row("EUR", *eur)
        + _row("JPY", *jpy)
        + "</div>"
    )


def _hidden(values):
    return "".join(
        f'<input type="hidden" name="{name}" value="{value}">' for name, value in values.items()
    )


def build_page(transfer=None, legacy=None, hidden=None, nav=True):
    parts = ["<html><body>"]
    if nav:
        parts.append(
            '<ul class="currency-tabs__nav">'
            '<li><a href="#currencyTab1">Для физических лиц</a></li>'
            '<li><a href="#currencyTab5">Для денежных переводов</a></li>'
            "</ul>"
        )
    parts.append(
        '<div class="currency-tabs__item" id="currencyTab1"><h3>Наличные</h3>'
        + _table(("80,00", "81,00"), ("85,00", "86,00"), ("50,00", "51,00"))
        + "</div>"
    )
    if legacy:
        parts.append('<div class="currency-tabs__item" id="currencyTab4">' + _table(*legacy) + "</div>")
    if transfer:
        parts.append(
            '<div class="currency-tabs__item" id="currencyTab5"><h3>Для денежных переводов</h3>'
            + _table(*transfer)
            + "</div>"
        )
    if hidden:
        parts.append("<form>" + _hidden(hidden) + "</form>")
    parts.append("</body></html>")
    return "\n".join(parts)


TRANSFER = (("92,10", "95,40"), ("99,00", "103,25"), ("60,10", "64,80"))
LEGACY = (("90,00", "93,00"), ("97,00", "101,00"), ("58,00", "62,00"))
HIDDEN = {"usd1": "91,00", "usd2": "94,00", "eur1": "98,00", "eur2": "102,00", "jpy2": "63,00"}


@pytest.fixture
def page():
    return build_page


@pytest.fixture
def transfer_values():
    return TRANSFER


@pytest.fixture
def legacy_values():
    return LEGACY


@pytest.fixture
def hidden_values():
    return dict(HIDDEN)


@pytest.fixture
def snapshot():
    return RateSnapshot.from_mapping(
        date(2025, 3, 14),
        {
            "RUB": Decimal("1"),
            "USD": Decimal("90"),
            "EUR": Decimal("100"),
            "JPY": Decimal("0.3"),
        },
    )
