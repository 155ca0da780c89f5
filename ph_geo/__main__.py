"""CLI entrypoint for ph_geo."""

from __future__ import annotations

import argparse
import json

from ph_geo.logging_config import setup_logging
from ph_geo.models import LocationMatch


def main() -> None:
    parser = argparse.ArgumentParser(prog="ph-geo")
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace candidates and scores")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve")
    sub.add_parser("stats")

    parse_parser = sub.add_parser("parse")
    parse_parser.add_argument("text")

    try_parser = sub.add_parser("try")
    try_parser.add_argument("text", nargs="?")

    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose else None)

    if args.command == "serve":
        _serve()
    elif args.command == "stats":
        _stats()
    elif args.command == "parse":
        _parse_once(args.text)
    elif args.command == "try":
        _try_mode(args.text)


def _serve() -> None:
    import uvicorn

    from ph_geo.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "ph_geo.api:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=(settings.env == "development"),
        log_level=settings.log_level.lower(),
    )


def _stats() -> None:
    from ph_geo.gazetteer import get_index

    print(json.dumps(get_index().stats(), indent=2))


def _parse_once(text: str) -> None:
    from ph_geo.resolver import resolve_location

    match = resolve_location(text)
    print(json.dumps(match.model_dump() if match else None, ensure_ascii=False, indent=2))


def _try_mode(initial_text: str | None) -> None:
    from ph_geo.resolver import resolve_location

    if initial_text:
        _print_cli_result(initial_text, resolve_location(initial_text))
        return

    print("PH Geo Interactive")
    print("Enter a post or comment to resolve.")
    print("Type 'quit' to exit.")

    while True:
        text = input("text> ").strip()
        if not text:
            continue
        if text.lower() in {"quit", "exit", "q"}:
            break
        _print_cli_result(text, resolve_location(text))


def _print_cli_result(text: str, match: LocationMatch | None) -> None:
    from ph_geo.context import analyze_location_risk
    from ph_geo.formatting import format_location

    print("\n" + "-" * 72)
    print(f"Text: {text}")
    print(f"Risk:        {analyze_location_risk(text).level}")

    if match is None:
        print("(none)")
        return

    print(f"Region:      {match.region}")
    print(f"Province:    {match.province}")
    print(f"City:        {match.city}")
    print(f"Barangay:    {match.barangay}")
    print(f"Confidence:  {match.confidence:.0%}")
    print(f"Formatted:   {format_location(match)}")


if __name__ == "__main__":
    main()
