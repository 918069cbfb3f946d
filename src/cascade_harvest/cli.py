# cli.py
# Command line interface for cascade-harvest

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
from pathlib import Path

from .log_utils import configure_logging
from .services.catalog_service import CatalogService, save_json
from .settings import SETTINGS, Settings
from .utils.browser_factory import BrowserConfig, BrowserFactory
from .utils.exceptions import CascadeHarvestError
from .utils.responses import HarvestResult, OperationResult

logger = logging.getLogger(__name__)

CATALOGS = ("cars", "chassis", "regions")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cascade-harvest",
        description="Harvest dependent and flat option lists from a dynamically rendered page",
    )
    parser.add_argument("--url", help="Target page (default: HARVEST_TARGET_URL)")
    parser.add_argument("--ws-url", help="Remote Chrome DevTools WebSocket URL")
    parser.add_argument("--headful", action="store_true", help="Visible browser (not headless)")
    parser.add_argument("--slowmo", type=int, default=0, help="Delay between actions in ms")
    parser.add_argument("--settle-ms", type=int, help="Fixed settle delay after each parent selection")
    parser.add_argument("--settle-mode", choices=("fixed", "quiescence"), help="How to wait for the dependent list")
    parser.add_argument("--ready-timeout-ms", type=int, help="Give up waiting for a container after this long")
    parser.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name in CATALOGS:
        sp = subparsers.add_parser(name, help=f"Harvest the {name} catalog and print it as JSON")
        sp.add_argument("--out", help="Also write the mapping to this JSON file")

    all_parser = subparsers.add_parser("all", help="Harvest every catalog into JSON files")
    all_parser.add_argument("--out-dir", default=None, help="Output directory (default: HARVEST_OUT_DIR)")

    return parser


def settings_from_args(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    base = base or SETTINGS
    enum_changes = {}
    if args.settle_ms is not None:
        enum_changes["settle_ms"] = args.settle_ms
    if args.settle_mode:
        enum_changes["settle_mode"] = args.settle_mode
    if args.ready_timeout_ms is not None:
        enum_changes["ready_timeout_ms"] = args.ready_timeout_ms

    browser_changes = {}
    if args.url:
        browser_changes["target_url"] = args.url
    if args.ws_url:
        browser_changes["chrome_ws_url"] = args.ws_url
    if args.headful:
        browser_changes["headless"] = False

    return dataclasses.replace(
        base,
        enumeration=dataclasses.replace(base.enumeration, **enum_changes),
        browser=dataclasses.replace(base.browser, **browser_changes),
    )


async def run_command(args: argparse.Namespace, settings: Settings) -> OperationResult:
    config = BrowserConfig.from_settings(settings.browser)
    config.slow_mo = args.slowmo

    async with BrowserFactory.create_async(config) as context:
        service = CatalogService(context, settings)

        if args.command == "all":
            written = await service.fetch_all(args.out_dir)
            return OperationResult.ok({name: str(path) for name, path in written.items()})

        if args.command == "cars":
            report = await service.fetch_cars()
            result = HarvestResult.ok_with_mapping(report.mapping, **report.stats())
        else:
            result = HarvestResult.ok_with_mapping(await service.fetch_catalog(args.command))

        if getattr(args, "out", None):
            save_json(Path(args.out), result.data)
        return result


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = settings_from_args(args)
    configure_logging(args.log_level)

    try:
        result = asyncio.run(run_command(args, settings))
    except CascadeHarvestError as e:
        logger.error("%s", e)
        result = OperationResult.fail(str(e), **e.details)
    except KeyboardInterrupt:
        print("\n[Aborted]")
        return 130

    print(result.to_json(indent=2))
    return 0 if result.success else 1
