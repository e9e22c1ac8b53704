from datetime import date
from decimal import Decimal

import pytest

from importcalc.errors import UnknownCurrency, UnsupportedBracket
from importcalc.models import (
    AgeCategory,
    DeliveryParameters,
    EngineCategory,
    RateSnapshot,
    VehicleDescription,
)
from importcalc.tariff import TariffEngine, calc_delivery, compute, convert_to_rub
from importcalc.tariff.duty import calc_duty_eur, duty_rate_eur_per_cc


def _vehicle(**overrides):
    params = dict(
        price=Decimal("1000000"),
        currency="JPY",
        age=AgeCategory.FROM_3_TO_5,
        engine=EngineCategory.ICE,
        engine_cc=1000,
        horsepower=140,
    )
    params.update(overrides)
    return VehicleDescription(**params)


@pytest.mark.parametrize(
    "cc, rate",
    [
        (1, "1.5"),
        (1000, "1.5"),
        (1001, "1.7"),
        (1500, "1.7"),
        (1800, "2.5"),
        (2300, "2.7"),
        (2301, "3.0"),
        (3000, "3.0"),
        (3001, "3.6"),
        (6000, "3.6"),
    ],
)
def test_duty_rate_ladder(cc, rate):
    assert duty_rate_eur_per_cc(cc) == Decimal(rate)


def test_duty_eur_is_rate_times_volume():
    assert calc_duty_eur(1000) == Decimal("1500")
    assert calc_duty_eur(2500) == Decimal("7500")


def test_compute_reference_example(snapshot):
    result = compute(_vehicle(), snapshot, DeliveryParameters())

    assert result.price_rub == Decimal("300000")
    assert result.duty_eur == Decimal("1500")
    assert result.duty_rub == Decimal("150000")
    assert result.customs_fee_rub == Decimal("2134")
    assert result.recycling_fee_rub == Decimal("5200")
    assert result.recycling_fee_exact

    d = result.delivery
    assert d.jp_expenses_rub == Decimal("72300")
    assert d.freight_rub == Decimal("27000")
    assert d.total_min == Decimal("209300")
    assert d.total_max == Decimal("299300")
    assert result.delivery_total_rub == Decimal("254300")

    assert result.total == Decimal("711634")
    assert result.notes == ()


def test_compute_total_is_sum_of_parts(snapshot):
    result = compute(_vehicle(price=Decimal("12345.67"), currency="USD", engine_cc=2800, horsepower=150), snapshot, DeliveryParameters())
    expected = (
        result.price_rub
        + result.duty_rub
        + result.customs_fee_rub
        + result.recycling_fee_rub
        + (result.delivery.total_min + result.delivery.total_max) / 2
    )
    assert result.total == expected


def test_delivery_midpoint_is_not_rounded(snapshot):
    delivery = DeliveryParameters(ru_processing_min_rub=1, ru_processing_max_rub=2, company_fee_min_rub=0, company_fee_max_rub=0)
    details = calc_delivery(delivery, snapshot)
    assert details.total_max - details.total_min == Decimal("1")
    assert details.midpoint == details.total_min + Decimal("0.5")


@pytest.mark.parametrize("age", [AgeCategory.UNDER_3, AgeCategory.OVER_5, "under3", "over5"])
def test_compute_rejects_unsupported_age(snapshot, age):
    with pytest.raises(UnsupportedBracket) as exc_info:
        compute(_vehicle(age=age, horsepower=400, engine_cc=5000), snapshot, DeliveryParameters())
    assert exc_info.value.bracket in ("under3", "over5")


def test_compute_flags_default_recycling_coefficient(snapshot):
    result = compute(_vehicle(engine_cc=2500, horsepower=250), snapshot, DeliveryParameters())
    assert not result.recycling_fee_exact
    assert result.recycling_fee_rub == Decimal("1244000")
    assert result.notes
    assert result.as_dict()["breakdown"]["recyclingExact"] is False


def test_strict_engine_rejects_default_recycling_coefficient(snapshot):
    engine = TariffEngine(strict=True)
    with pytest.raises(UnsupportedBracket) as exc_info:
        engine.compute(_vehicle(engine_cc=2500, horsepower=250), snapshot, DeliveryParameters())
    assert exc_info.value.bracket == "default"
    # exact branches still work in strict mode
    assert engine.compute(_vehicle(), snapshot, DeliveryParameters()).total == Decimal("711634")


def test_compute_surfaces_unknown_currency():
    partial = RateSnapshot(date(2025, 3, 14), {"RUB": 1, "EUR": 100, "JPY": Decimal("0.3")})
    with pytest.raises(UnknownCurrency) as exc_info:
        compute(_vehicle(), partial, DeliveryParameters())
    # JPY price converts fine, USD freight does not
    assert exc_info.value.currency == "USD"


@pytest.mark.parametrize("code", ["JPY", "USD", "EUR", "RUB"])
def test_conversion_round_trip(snapshot, code):
    amount = Decimal("123456.789")
    rub = convert_to_rub(amount, code, snapshot)
    back = rub * (Decimal(1) / snapshot.rate(code))
    assert float(back) == pytest.approx(float(amount), rel=1e-12)


def test_as_dict_shape(snapshot):
    data = compute(_vehicle(), snapshot, DeliveryParameters()).as_dict()
    assert data["total"] == pytest.approx(711634)
    assert set(data["breakdown"]) >= {"priceRub", "dutyRub", "dutyEur", "feeRub", "recyclingRub", "deliveryTotalRub", "deliveryDetails"}
    assert data["breakdown"]["deliveryDetails"]["totalMin"] == pytest.approx(209300)
