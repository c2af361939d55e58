from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import ExcelReadError, read_raw_table
from ..logging.init import log_summary, setup_logging
from ..logging.issue_log import IssueLogBuffer
from ..models.birthday_record import RecordValidationError
from ..models.config_models import AppConfig
from ..services.directory import available_units, search_records, sort_by_birthday
from ..services.editing import add_record, build_manual_record, remove_record, replace_record, toggle_unit
from ..services.header_detector import detect_headers
from ..services.orchestrator import ProcessingError, import_files, run_check, scan_excel_files, today_in
from ..services.summary import render_check_summary_line, render_import_summary_line, render_widget_text
from ..store.json_store import JsonFileStore, StoreError

"""CLI entrypoint.

Commands:
- import [FILES...]   read registry exports (default: every .xlsx in source_directory)
- inspect FILE        show headers, detected roles and the first rows
- check [--date]      today's birthdays (what the daily scheduler runs)
- list / units        browse stored birthdays and unit subscriptions
- subscribe UNIT      toggle notifications for a unit
- add / edit / remove manual record maintenance

Config path: --config, else $BDAY_ALERT_CONFIG, else config/bday_alert.yml.
A .env file in the working directory is loaded first.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "BDAY_ALERT_CONFIG"

logger = logging.getLogger("bday_alert.cli")


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_date_arg(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'") from e


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="bday-alert", description="Scout registry birthday alerts")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help="Path to the YAML config")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import registry exports and replace stored birthdays")
    imp.add_argument("files", nargs="*", type=Path, help="Workbooks (default: source_directory/*.xlsx)")

    ins = sub.add_parser("inspect", help="Print headers, detected roles and first rows of a workbook")
    ins.add_argument("file", type=Path)
    ins.add_argument("--rows", type=int, default=3)

    chk = sub.add_parser("check", help="Show today's birthdays for the subscribed units")
    chk.add_argument("--date", type=_parse_date_arg, default=None, help="Reference date YYYY-MM-DD")
    chk.add_argument("--widget", action="store_true", help="Also print the widget text")

    lst = sub.add_parser("list", help="List stored birthdays in calendar order")
    lst.add_argument("--search", default="")
    lst.add_argument("--unit", default=None)

    sub.add_parser("units", help="List units and their notification state")

    subs = sub.add_parser("subscribe", help="Toggle notifications for a unit")
    subs.add_argument("unit")

    add = sub.add_parser("add", help="Add a birthday manually")
    add.add_argument("--given-name", default="")
    add.add_argument("--surname", default="")
    add.add_argument("--day", type=int, required=True)
    add.add_argument("--month", type=int, required=True)
    add.add_argument("--year", type=int, default=None)
    add.add_argument("--unit", default=None)

    edit = sub.add_parser("edit", help="Replace fields of the birthday at INDEX")
    edit.add_argument("index", type=int)
    edit.add_argument("--given-name", default=None)
    edit.add_argument("--surname", default=None)
    edit.add_argument("--day", type=int, default=None)
    edit.add_argument("--month", type=int, default=None)
    edit.add_argument("--year", type=int, default=None)
    edit.add_argument("--unit", default=None, help="Empty string clears the unit")

    rm = sub.add_parser("remove", help="Delete the birthday at INDEX")
    rm.add_argument("index", type=int)
    return p.parse_args(argv)


def _cmd_import(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    if args.files:
        paths = list(args.files)
    else:
        directory = Path(cfg.source_directory)
        try:
            paths = scan_excel_files(directory)
        except ProcessingError as e:
            logger.error(f"{e}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")

    result = import_files(paths, store, IssueLogBuffer(cfg.issue_log_dir))
    log_summary(render_import_summary_line(result).removeprefix("SUMMARY "))
    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def _cmd_inspect(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    try:
        table = read_raw_table(args.file)
    except ExcelReadError as e:
        logger.error(f"{e}")
        return EXIT_FATAL
    roles = detect_headers(table.headers)
    print(f"FILE: {args.file.name}")
    print(f"  headers={list(table.headers)}")
    print("  roles=" + ", ".join(f"{role.value}->{idx}" for role, idx in roles.items()))
    for row in table.rows[: args.rows]:
        print(f"  row={list(row.cells)}")
    return EXIT_SUCCESS_ALL


def _cmd_check(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    today = args.date or today_in(cfg.timezone)
    check = run_check(store, today)
    summary = check.summary
    logger.info(summary.title)
    for line in summary.detail_lines:
        logger.info(f"  {line}")
    if args.widget:
        widget = render_widget_text(summary, max_lines=cfg.widget_max_lines)
        print(widget.title)
        print(widget.subtitle)
        if widget.body:
            print(widget.body)
    log_summary(render_check_summary_line(summary, check.records).removeprefix("SUMMARY "))
    return EXIT_SUCCESS_ALL


def _cmd_list(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    records = store.load()
    if not records:
        logger.info("no birthdays stored")
        return EXIT_SUCCESS_ALL
    for entry in sort_by_birthday(search_records(records, args.search, args.unit)):
        r = entry.record
        unit = f" ({r.unit})" if r.unit else ""
        year = f" {r.year}" if r.year else ""
        print(f"[{entry.index}] {entry.date_label}{year} {r.display_name}{unit}")
    return EXIT_SUCCESS_ALL


def _cmd_units(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    subscribed = store.load_unit_subscriptions()
    units = available_units(store.load())
    if not subscribed:
        logger.info("no unit selected: notifications cover every unit")
    for unit in units:
        mark = "x" if unit in subscribed else " "
        print(f"[{mark}] {unit}")
    return EXIT_SUCCESS_ALL


def _cmd_subscribe(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    updated = toggle_unit(store.load_unit_subscriptions(), args.unit)
    store.save_unit_subscriptions(updated)
    state = "on" if args.unit in updated else "off"
    logger.info(f"notifications {state} for {args.unit}")
    return EXIT_SUCCESS_ALL


def _cmd_add(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    try:
        record = build_manual_record(
            args.given_name, args.surname, args.day, args.month, year=args.year, unit=args.unit
        )
    except RecordValidationError as e:
        logger.error(f"{e}")
        return EXIT_FATAL
    store.save(add_record(store.load(), record))
    logger.info(f"added {record.full_name}")
    return EXIT_SUCCESS_ALL


def _cmd_edit(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    records = store.load()
    if not 0 <= args.index < len(records):
        logger.error(f"no birthday at index {args.index}")
        return EXIT_FATAL
    current = records[args.index]
    try:
        record = build_manual_record(
            args.given_name if args.given_name is not None else current.given_name,
            args.surname if args.surname is not None else current.surname,
            args.day if args.day is not None else current.day,
            args.month if args.month is not None else current.month,
            year=args.year if args.year is not None else current.year,
            unit=args.unit if args.unit is not None else current.unit,
        )
    except RecordValidationError as e:
        logger.error(f"{e}")
        return EXIT_FATAL
    store.save(replace_record(records, args.index, record))
    logger.info(f"updated [{args.index}] {record.full_name}")
    return EXIT_SUCCESS_ALL


def _cmd_remove(args: argparse.Namespace, cfg: AppConfig, store: JsonFileStore) -> int:
    records = store.load()
    try:
        updated = remove_record(records, args.index)
    except IndexError as e:
        logger.error(f"{e}")
        return EXIT_FATAL
    store.save(updated)
    logger.info(f"removed {records[args.index].full_name}")
    return EXIT_SUCCESS_ALL


COMMANDS = {
    "import": _cmd_import,
    "inspect": _cmd_inspect,
    "check": _cmd_check,
    "list": _cmd_list,
    "units": _cmd_units,
    "subscribe": _cmd_subscribe,
    "add": _cmd_add,
    "edit": _cmd_edit,
    "remove": _cmd_remove,
}


def main(argv: list[str] | None = None) -> int:
    # argv=[] must not fall back to sys.argv (pytest flags would leak in)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    config_path = args.config or Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    store = JsonFileStore(cfg.store_path)
    try:
        return COMMANDS[args.command](args, cfg, store)
    except StoreError as e:
        logger.error(f"store: {e}")
        return EXIT_FATAL
