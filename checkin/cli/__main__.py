from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from checkin.config.loader import DEFAULT_SETTINGS_PATH
from checkin.config.store import SettingsStore
from checkin.errors import AttendeeNotFoundError, CheckinError, ConfigError
from checkin.logging.init import log_summary, set_debug, setup_logging
from checkin.models.config_models import Settings
from checkin.models.import_state import ImportStatus
from checkin.services.session import CheckinSession
from checkin.services.summary import render_error_breakdown, render_summary_line

"""CLI entrypoint.

Commands:
- inspect FILE: scan a roster and report the summary and issues by section
- checkin FILE ID [ID ...]: import, check identifiers in, save the workbook
- settings show | auto-save on PATH | auto-save off | direct-edit on|off

The settings file is taken from --settings, then $CHECKIN_SETTINGS (a .env
file in the working directory is loaded first), then config/settings.yml.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_REQUIRES_ACTION = 2

SETTINGS_ENV = "CHECKIN_SETTINGS"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (explicit environment wins by default)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _settings_path(args: argparse.Namespace) -> Path:
    if args.settings:
        return Path(args.settings)
    env = os.getenv(SETTINGS_ENV)
    if env:
        return Path(env)
    return DEFAULT_SETTINGS_PATH


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="roster-checkin", description="Event roster check-in tool")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--settings", help="Settings YAML file")
    sub = p.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser("inspect", help="Scan a roster and report issues")
    inspect.add_argument("file", type=Path)
    inspect.set_defaults(func=_cmd_inspect)

    checkin = sub.add_parser("checkin", help="Check attendees in and save the roster")
    checkin.add_argument("file", type=Path)
    checkin.add_argument("identifiers", nargs="+", metavar="ID")
    checkin.add_argument("--output", type=Path, help="Destination (default: updated_<file> beside the source)")
    checkin.add_argument(
        "--accept-partial",
        action="store_true",
        help="Continue with valid rows when the roster has header issues",
    )
    checkin.set_defaults(func=_cmd_checkin)

    settings = sub.add_parser("settings", help="Show or change settings")
    settings.add_argument("action", choices=["show", "auto-save", "direct-edit"])
    settings.add_argument("value", nargs="?", choices=["on", "off"])
    settings.add_argument("path", nargs="?", help="Auto-save destination (auto-save on)")
    settings.set_defaults(func=_cmd_settings)
    return p.parse_args(argv)


def _report(session: CheckinSession) -> None:
    logger = setup_logging()
    result = session.state.processing_result
    if result is None:
        return
    # log_summary adds the "SUMMARY " prefix
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    for line in render_error_breakdown(result):
        logger.info(line)


def _start(session: CheckinSession, path: Path) -> bool:
    logger = setup_logging()
    try:
        session.start_import(path)
    except CheckinError as e:
        logger.error(f"import: {e}")
        return False
    _report(session)
    return True


def _cmd_inspect(args: argparse.Namespace, settings: Settings, store: SettingsStore) -> int:
    session = CheckinSession(settings, show_progress=True)
    if not _start(session, args.file):
        return EXIT_FATAL
    if session.status is ImportStatus.PAUSED:
        return EXIT_REQUIRES_ACTION
    return EXIT_SUCCESS


def _cmd_checkin(args: argparse.Namespace, settings: Settings, store: SettingsStore) -> int:
    logger = setup_logging()
    session = CheckinSession(settings, show_progress=True)
    if not _start(session, args.file):
        return EXIT_FATAL

    if session.status is ImportStatus.PAUSED:
        if not args.accept_partial:
            session.cancel_import()
            logger.error("import requires review: rerun with --accept-partial to continue with valid rows")
            return EXIT_REQUIRES_ACTION
        session.continue_with_valid_rows()

    not_found = 0
    for identifier in args.identifiers:
        try:
            attendee = session.check_in(identifier)
        except AttendeeNotFoundError:
            logger.warning(f"not found: {identifier}")
            not_found += 1
            continue
        except CheckinError as e:
            logger.error(f"check-in {identifier}: {e}")
            return EXIT_FATAL
        logger.info(f"{attendee.identifier} {attendee.display_name}: {attendee.checked_in}")

    try:
        target = session.save(args.output)
    except CheckinError as e:
        logger.error(f"save: {e}")
        return EXIT_FATAL
    logger.info(f"saved: {target}")
    return EXIT_REQUIRES_ACTION if not_found else EXIT_SUCCESS


def _cmd_settings(args: argparse.Namespace, settings: Settings, store: SettingsStore) -> int:
    logger = setup_logging()
    try:
        if args.action == "auto-save":
            if args.value is None:
                logger.error("settings: auto-save needs on|off")
                return EXIT_FATAL
            settings = store.set_auto_save(args.value == "on", args.path)
        elif args.action == "direct-edit":
            if args.value is None:
                logger.error("settings: direct-edit needs on|off")
                return EXIT_FATAL
            settings = store.set_direct_edit(args.value == "on")
    except ConfigError as e:
        logger.error(f"settings: {e}")
        return EXIT_FATAL
    logger.info(
        f"auto_save={settings.auto_save} auto_save_path={settings.auto_save_path} "
        f"direct_edit={settings.direct_edit} timestamp_format={settings.timestamp_format!r}"
    )
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only None reads sys.argv; an explicit list (tests) must not pick up pytest's flags
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug()
        logger.debug("debug mode enabled")

    store = SettingsStore(_settings_path(args))
    try:
        settings = store.load()
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    return args.func(args, settings, store)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
