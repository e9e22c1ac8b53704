"""Command line entry point: estimate one vehicle and print the breakdown."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from importcalc.errors import ImportCalcError
from importcalc.models import AgeCategory, EngineCategory, SUPPORTED_CURRENCY_CODES, VehicleDescription
from importcalc.services import build_service, close_rates_session
from importcalc.settings import Settings, load_settings

logger = logging.getLogger("importcalc")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="importcalc", description="Estimate vehicle import cost in RUB")
    parser.add_argument("--price", required=True, help="declared price")
    parser.add_argument("--currency", default="JPY", choices=SUPPORTED_CURRENCY_CODES)
    parser.add_argument("--age", default=AgeCategory.FROM_3_TO_5.value, choices=[a.value for a in AgeCategory])
    parser.add_argument("--engine", default=EngineCategory.ICE.value, choices=[e.value for e in EngineCategory])
    parser.add_argument("--cc", type=int, required=True, help="engine displacement, cm³")
    parser.add_argument("--hp", type=int, required=True, help="engine power, hp")
    return parser


async def _run(args: argparse.Namespace, settings: Settings) -> dict:
    service = build_service(settings)
    vehicle = VehicleDescription(
        price=args.price,
        currency=args.currency,
        age=args.age,
        engine=args.engine,
        engine_cc=args.cc,
        horsepower=args.hp,
    )
    try:
        result = await service.estimate(vehicle)
    finally:
        await close_rates_session()
    return result.as_dict()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    try:
        data = asyncio.run(_run(args, settings))
    except (ImportCalcError, ValidationError) as exc:
        logger.error("Calculation failed: %s", exc)
        print(f"Ошибка: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
