"""
Command line entry point: check plugin sources, install or uninstall a plugin.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .config import Config
from .core.models import InstalledPlugin, PluginRecord
from .updates.checker import PluginUpdateChecker
from .utils.logging import get_log_file_path, get_logger, setup_logging
from .utils.settings import SettingsManager


def parse_installed(values: Sequence[str]) -> List[InstalledPlugin]:
    """Parse NAME=VERSION pairs."""
    installed = []
    for value in values:
        name, sep, version = value.partition("=")
        if not sep or not name or not version:
            raise argparse.ArgumentTypeError(f"expected NAME=VERSION, got {value!r}")
        installed.append(InstalledPlugin(name=name, version=version))
    return installed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plugin-update-check",
        description="Check plugin sources for updates and install or uninstall plugins.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--root", help="Directory holding the plugins folder and archive")
    parser.add_argument("--log-level", help="Logging level (overrides the configuration)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="List plugins offered by the sources")
    check.add_argument("urls", nargs="*", help="Plugin source URLs (default: configured sources)")
    check.add_argument("--installed", action="append", default=[], metavar="NAME=VERSION",
                       help="A locally installed plugin; may be repeated")

    for name, help_text in (("install", "Download a plugin's files"),
                            ("uninstall", "Remove a plugin's files")):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("url", help="Plugin source URL")
        command.add_argument("plugin", help="Plugin name as listed by the source")
        command.add_argument("--archive", action="store_true", default=None,
                             help="Use the plugins archive instead of loose files")

    return parser


def _find_record(records: List[PluginRecord], name: str) -> Optional[PluginRecord]:
    for record in records:
        if record.name == name:
            return record
    return None


def run(args: argparse.Namespace, config: Config) -> int:
    logger = get_logger(__name__)
    if args.root:
        config.sources.root_dir = str(Path(args.root))

    settings = None
    if config.notifications.use_notifications is None:
        settings = SettingsManager(settings_file=config.notifications.settings_file or None)

    with PluginUpdateChecker.from_config(config, settings=settings) as checker:
        if args.command == "check":
            urls = args.urls or config.sources.plugin_urls
            if not urls:
                print("No plugin sources given or configured.", file=sys.stderr)
                return 1
            records = checker.check_for_updates(urls, args.installed_plugins)
            for record in checker.notify_updates(records):
                logger.debug(f"Update available for {record.name}")
            for record in records:
                marker = " (update available)" if checker.needs_update(record) else ""
                print(f"{record.name}\t{record.display_version}{marker}")
            return 0

        save_to_archive = config.sources.save_to_archive if args.archive is None else args.archive
        record = _find_record(checker.check_for_updates([args.url], []), args.plugin)
        if record is None:
            print(f"Plugin {args.plugin} is not listed by {args.url}", file=sys.stderr)
            return 1

        if args.command == "install":
            changed = checker.install(record, save_to_archive)
        else:
            changed = checker.uninstall(record, save_to_archive)
        print(f"{args.command} {record.name} {record.current_version}: {'done' if changed else 'nothing changed'}")
        return 0 if changed else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main command line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.installed_plugins = parse_installed(getattr(args, "installed", []))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    config = Config.load_from_file(args.config)
    config.validate()
    setup_logging(
        level=args.log_level or config.logging.level,
        log_file=config.logging.file_path or None,
        max_bytes=config.logging.max_file_size,
        backup_count=config.logging.backup_count,
    )

    try:
        exit_code = run(args, config)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    log_file = get_log_file_path()
    if exit_code != 0 and log_file:
        print(f"See {log_file} for details.", file=sys.stderr)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
