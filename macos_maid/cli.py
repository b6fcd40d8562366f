from __future__ import annotations

import argparse
import json
import sys
import textwrap
from pathlib import Path
from typing import Callable

from .config import (
    SettingsError,
    default_event_log_path,
    default_settings_path,
    load_settings_or_defaults,
    write_default_settings,
)
from .event_log import EventLogger
from .gui_data import TEXTS, terms_sections
from .onboarding import GateNotSatisfied, OnboardingController, OnboardingStage
from .scan import SimulatedScan, format_progress, run_blocking

CONSOLE_LINE_HEIGHT = 20
CONSOLE_WRAP_WIDTH = 76


def positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("value must be an integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be greater than 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="macos-maid", description="Keep your Mac clean (preview).")
    parser.add_argument("--settings", type=Path, default=default_settings_path(), help="Settings JSON path.")
    parser.add_argument("--event-log", type=Path, default=default_event_log_path(), help="Event log path.")

    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    init_parser = subparsers.add_parser("init", help="Create a default settings file.")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing settings.")

    subparsers.add_parser("show", help="Print settings JSON.")
    subparsers.add_parser("gui", help="Open the desktop window.")

    onboard_parser = subparsers.add_parser("onboard", help="Walk through welcome and terms in the terminal.")
    onboard_parser.add_argument("--page-lines", type=positive_int, default=12, help="Terms lines shown per page.")

    subparsers.add_parser("scan", help="Run the simulated quick scan.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.subcommand == "init":
        write_default_settings(args.settings, overwrite=args.force)
        print(f"Settings ready: {args.settings}")
        return 0

    if args.subcommand == "gui":
        return run_gui(args.settings, args.event_log)

    try:
        settings = load_settings_or_defaults(args.settings)
    except SettingsError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.subcommand == "show":
        print(json.dumps(settings.to_dict(), indent=2))
        return 0

    event_log = EventLogger(args.event_log)

    if args.subcommand == "onboard":
        controller = OnboardingController(tolerance=settings.scroll_tolerance, on_event=event_log)
        return run_console_onboarding(controller, page_lines=args.page_lines, language=settings.language)

    if args.subcommand == "scan":
        scan = SimulatedScan(settings.scan_duration_sec, settings.scan_tick_sec, on_event=event_log)
        print(scan.status.message)
        status = run_blocking(scan, on_tick=lambda progress: print(format_progress(progress)))
        print(status.message)
        return 0

    print("Unsupported command.", file=sys.stderr)
    return 2


def terms_lines(language: str = "en", width: int = CONSOLE_WRAP_WIDTH) -> list[str]:
    lines: list[str] = []
    for heading, body in terms_sections(language):
        lines.append(heading)
        lines.extend(textwrap.wrap(body, width=width))
        lines.append("")
    return lines


def run_console_onboarding(
    controller: OnboardingController,
    page_lines: int = 12,
    language: str = "en",
    read: Callable[[str], str] | None = None,
) -> int:
    read = read or input
    texts = TEXTS[language]
    print(texts["app_title"])
    print(texts["welcome_subtitle"])
    print()
    print(textwrap.fill(texts["welcome_body"], width=CONSOLE_WRAP_WIDTH))
    try:
        read(f"[Enter] {texts['welcome_button']} ")
    except EOFError:
        return 1
    controller.request_advance_from_welcome()

    print()
    print(texts["terms_title"])
    print(texts["terms_subtitle"])
    print()
    lines = terms_lines(language)
    total = len(lines)
    shown = 0
    while controller.stage is OnboardingStage.TERMS:
        if shown < total:
            end = min(shown + page_lines, total)
            for line in lines[shown:end]:
                print(line)
            shown = end
            controller.report_scroll_position(total * CONSOLE_LINE_HEIGHT, shown * CONSOLE_LINE_HEIGHT)
        if controller.has_reached_bottom:
            print(texts["terms_helper_done"])
            prompt = f"[a] {texts['terms_button']}, [q] quit: "
        else:
            print(f"{texts['terms_scroll_hint']} ({texts['terms_helper_pending'].lower()})")
            prompt = f"[Enter] scroll, [a] {texts['terms_button']}, [q] quit: "
        try:
            choice = read(prompt).strip().lower()
        except EOFError:
            return 1
        if choice == "q":
            return 1
        if choice == "a":
            try:
                controller.request_advance_from_terms()
            except GateNotSatisfied:
                print(texts["terms_helper_pending"], file=sys.stderr)

    print()
    print(texts["dashboard_title"])
    return 0


def run_gui(settings_path: Path, event_log_path: Path) -> int:
    from .gui import launch_gui

    launch_gui(settings_path, event_log_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
