"""Command-line interface for Amar Foshol advisories."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from amar_foshol.config import get_settings
from amar_foshol.locations import (
    LocationNotFoundError,
    get_district,
    get_districts,
    get_divisions,
)
from amar_foshol.models.advisory import Advisory
from amar_foshol.models.weather import ForecastWindow, WeatherData
from amar_foshol.providers.base import ProviderError
from amar_foshol.providers.openmeteo import OpenMeteoProvider
from amar_foshol.risk.crop_risk import calculate_risk, generate_alert
from amar_foshol.rules.engine import generate_advisories, generate_field_advisories
from amar_foshol.rules.seasons import season_for_month
from amar_foshol.utils.bangla import (
    format_percentage_bn,
    format_temperature_bn,
    to_bangla_number,
)


def _print_advisories(
    advisories: list[Advisory], bangla: bool = False, as_json: bool = False
) -> None:
    if as_json:
        print(
            json.dumps(
                [a.model_dump(mode="json") for a in advisories],
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    if not advisories:
        print("No advisories for this forecast.")
        return

    for advisory in advisories:
        title = advisory.title_bn if bangla else advisory.title
        message = advisory.message_bn if bangla else advisory.message
        action = advisory.action_bn if bangla else advisory.action
        print(f"[{advisory.type.value.upper()}] risk {advisory.risk_level}: {title}")
        print(f"    {message}")
        print(f"    -> {action}")


def _print_forecast(weather: WeatherData, bangla: bool = False) -> None:
    for day in weather.forecasts:
        if bangla:
            print(
                f"{to_bangla_number(day.date.isoformat())}  "
                f"{format_temperature_bn(day.temp_min)}-"
                f"{format_temperature_bn(day.temp_max)}  "
                f"আর্দ্রতা {format_percentage_bn(day.humidity)}  "
                f"বৃষ্টি {format_percentage_bn(day.rain_probability)}"
            )
            continue
        print(
            f"{day.date.isoformat()}  "
            f"{day.temp_min:5.1f}-{day.temp_max:5.1f}°C  "
            f"humidity {day.humidity:3.0f}%  "
            f"rain {day.rain_probability:3.0f}%"
        )


def _window_advisories(
    window: ForecastWindow, field: bool, month: int | None, bangla: bool
) -> tuple[list[Advisory], str]:
    """Advisories for a window plus a one-line header describing them."""
    header = f"{window.start.isoformat()} - {window.end.isoformat()}"
    if not field:
        return generate_advisories(window.forecasts), header

    month = month or window.start.month
    season = season_for_month(month)
    label = season.name_bn if bangla else season.value
    return (
        generate_field_advisories(window.forecasts, month),
        f"{header} ({label})",
    )


def cmd_advise(args: argparse.Namespace) -> int:
    """Evaluate a forecast window stored in a JSON file."""
    try:
        payload = json.loads(Path(args.file).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    if isinstance(payload, list):
        payload = {"forecasts": payload}

    try:
        window = ForecastWindow.model_validate(payload)
    except ValidationError as e:
        print(f"Invalid forecast window:\n{e}", file=sys.stderr)
        return 1

    advisories, header = _window_advisories(
        window, args.field, args.month, args.bangla
    )
    if not args.json:
        print(f"Advisories for {header}")
    _print_advisories(advisories, bangla=args.bangla, as_json=args.json)
    return 0


async def _forecast(args: argparse.Namespace) -> int:
    place = get_district(args.division, args.district)
    async with OpenMeteoProvider.from_settings() as provider:
        weather = await provider.get_forecast(place.coordinates)

    print(f"Forecast for {place.display_name()}")
    _print_forecast(weather, args.bangla)
    if args.advise or args.field:
        advisories, header = _window_advisories(
            weather.window(), args.field, None, args.bangla
        )
        print()
        print(f"Advisories for {header}")
        _print_advisories(advisories, args.bangla)
    return 0


async def _risk(args: argparse.Namespace) -> int:
    place = get_district(args.division, args.district)
    async with OpenMeteoProvider.from_settings() as provider:
        conditions = await provider.get_next_day_conditions(place.coordinates)

    risk = calculate_risk(args.crop, conditions)
    print(
        f"Tomorrow in {place.display_name()}: {conditions.temp:.1f}°C, "
        f"humidity {conditions.humidity:.0f}%, rain {conditions.rain_amount:.1f} mm"
    )
    risk_type = f" ({risk.type.value})" if risk.type else ""
    print(f"Risk for {args.crop}: {risk.level.value}{risk_type}")

    alert = generate_alert(args.crop, conditions, risk, place.display_name())
    if alert:
        print(alert.message_bn if args.bangla else alert.message)
    return 0


def cmd_forecast(args: argparse.Namespace) -> int:
    """Fetch and print the 5-day forecast for a district."""
    try:
        return asyncio.run(_forecast(args))
    except (LocationNotFoundError, ProviderError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_risk(args: argparse.Namespace) -> int:
    """Assess tomorrow's risk for a crop in a district."""
    try:
        return asyncio.run(_risk(args))
    except (LocationNotFoundError, ProviderError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_locations(args: argparse.Namespace) -> int:
    """List divisions, or the districts of one division."""
    if args.division is None:
        names = get_divisions()
    else:
        try:
            names = get_districts(args.division)
        except LocationNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    for name in names:
        print(name)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "amar_foshol.api.app:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amar-foshol",
        description="Amar Foshol - weather-driven advisories for farmers",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Advise command
    advise_parser = subparsers.add_parser(
        "advise", help="Generate advisories from a 5-day forecast JSON file"
    )
    advise_parser.add_argument("file", help="JSON list of 5 daily forecasts")
    advise_parser.add_argument(
        "--bangla", action="store_true", help="Print Bangla text"
    )
    advise_parser.add_argument(
        "--json", action="store_true", help="Print advisories as JSON"
    )
    advise_parser.add_argument(
        "--field", action="store_true", help="Field-work advisories by season"
    )
    advise_parser.add_argument(
        "--month",
        type=int,
        choices=range(1, 13),
        metavar="1-12",
        help="Month for seasonal advice (default: month of the first day)",
    )
    advise_parser.set_defaults(func=cmd_advise)

    # Forecast command
    forecast_parser = subparsers.add_parser(
        "forecast", help="Get the 5-day forecast for a district"
    )
    forecast_parser.add_argument("division", help="Division name (Bangla)")
    forecast_parser.add_argument("district", help="District name (Bangla)")
    forecast_parser.add_argument(
        "--advise", action="store_true", help="Also print advisories"
    )
    forecast_parser.add_argument(
        "--field", action="store_true", help="Also print field-work advisories"
    )
    forecast_parser.add_argument(
        "--bangla", action="store_true", help="Print Bangla text"
    )
    forecast_parser.set_defaults(func=cmd_forecast)

    # Risk command
    risk_parser = subparsers.add_parser(
        "risk", help="Assess tomorrow's weather risk for a crop"
    )
    risk_parser.add_argument("crop", help="Crop such as rice, potato or jute")
    risk_parser.add_argument("division", help="Division name (Bangla)")
    risk_parser.add_argument("district", help="District name (Bangla)")
    risk_parser.add_argument(
        "--bangla", action="store_true", help="Print the Bangla alert"
    )
    risk_parser.set_defaults(func=cmd_risk)

    # Locations command
    locations_parser = subparsers.add_parser(
        "locations", help="List divisions or the districts of a division"
    )
    locations_parser.add_argument("division", nargs="?", help="Division name")
    locations_parser.set_defaults(func=cmd_locations)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Bind port")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes"
    )
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
