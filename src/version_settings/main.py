import argparse
import dataclasses
import json
import logging
import sys
from typing import Optional

from . import config
from .exceptions import SettingsError
from .java import JavaDiscovery
from .store import SettingsStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="version-settings",
        description="Inspect and edit per-version launch settings",
    )
    parser.add_argument("--minecraft-dir", default=None, help="Game root directory")
    parser.add_argument("--settings-file", default=str(config.SETTINGS_FILE))
    parser.add_argument("--debug", action="store_true", help="Show debug logs")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List installed versions")

    show = sub.add_parser("show", help="Print the settings that apply to a version")
    show.add_argument("version", nargs="?", help="Omit for the global settings")

    set_ = sub.add_parser("set", help="Change settings, e.g. maxMemory=4096")
    set_.add_argument("--version", dest="version", default=None)
    set_.add_argument("values", nargs="+", metavar="KEY=VALUE")

    specialize = sub.add_parser("specialize", help="Give a version its own settings")
    specialize.add_argument("version")

    globalize = sub.add_parser("globalize", help="Make a version use the global settings")
    globalize.add_argument("version")

    launch = sub.add_parser("launch-options", help="Print the launch options of a version")
    launch.add_argument("version")
    return parser


def parse_assignment(text: str) -> tuple[str, object]:
    key, sep, raw = text.partition("=")
    if not sep or not key:
        raise SettingsError(f"Expected KEY=VALUE, got {text!r}")
    try:
        value = json.loads(raw)
    except ValueError:
        value = raw
    return key.strip(), value


def run(args: argparse.Namespace) -> int:
    store = SettingsStore(args.minecraft_dir, args.settings_file)
    store.load()

    if args.command == "list":
        for version in store.list_versions():
            setting = store.get_version_setting(version)
            own = setting is not None and not setting.uses_global
            print(f"{version}\t{'own' if own else 'global'}")
    elif args.command == "show":
        setting = store.resolve(args.version) if args.version else store.global_setting
        print(json.dumps(setting.to_json(), indent=4))
    elif args.command == "set":
        if args.version:
            setting = store.specialize_version_setting(args.version)
        else:
            setting = store.global_setting
        setting.update_from_json(dict(parse_assignment(v) for v in args.values))
    elif args.command == "specialize":
        store.specialize_version_setting(args.version)
    elif args.command == "globalize":
        store.globalize_version_setting(args.version)
    elif args.command == "launch-options":
        discovery = JavaDiscovery(store.minecraft_directory)
        options = store.to_launch_options(args.version, discovery)
        print(json.dumps(dataclasses.asdict(options), indent=4, default=str))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.setup_logging(level=logging.DEBUG if args.debug else logging.WARNING)
    try:
        return run(args)
    except SettingsError as e:
        logging.error(str(e))
        print(e, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
