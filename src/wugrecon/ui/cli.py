from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from wugrecon.app import Action, connect, lookup_monitor_type, reconcile
from wugrecon.config import (
    ConfigurationError,
    configure_logging,
    dump_record,
    get_wug_config,
    load_device,
    load_monitor,
)
from wugrecon.domain.errors import WugError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from wugrecon.domain.records import DesiredRecord

log = logging.getLogger(__name__)

_LOADERS = {"device": load_device, "monitor": load_monitor}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile WhatsUp Gold resources")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for kind in _LOADERS:
        resource = subparsers.add_parser(kind, help=f"Manage a {kind}")
        actions = resource.add_subparsers(dest="action", required=True)

        create = actions.add_parser(Action.CREATE, help=f"Create a {kind} from FILE")
        create.add_argument("file", help="Desired state as a JSON or TOML file")

        for action in (Action.READ, Action.UPDATE, Action.DELETE):
            sub = actions.add_parser(action, help=f"{action.capitalize()} an existing {kind}")
            sub.add_argument("identifier", help=f"Server-assigned {kind} id")
            sub.add_argument("file", help="Desired state as a JSON or TOML file")

    monitor_type = subparsers.add_parser(
        "monitor-type", help="Look up a monitor type in the monitor library"
    )
    monitor_type.add_argument(
        "--type",
        dest="kind",
        choices=("active", "performance"),
        required=True,
        help="Monitor kind to search",
    )
    monitor_type.add_argument(
        "--search", required=True, help="Name (or part of it) of the monitor type"
    )

    return parser.parse_args(list(argv))


def _load_desired(args: argparse.Namespace) -> DesiredRecord | None:
    if args.command == "monitor-type":
        return None
    return _LOADERS[args.command](args.file)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.INFO)

    try:
        desired = _load_desired(parsed_args)
        config = get_wug_config()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        reconcilers = connect(config)
        if desired is None:
            match = lookup_monitor_type(
                parsed_args.kind, parsed_args.search, reconcilers=reconcilers
            )
            print(dump_record(match))  # noqa: T201
            return

        action = Action(parsed_args.action)
        instance = reconcile(
            action,
            desired,
            identifier=getattr(parsed_args, "identifier", ""),
            reconcilers=reconcilers,
        )
    except WugError:
        log.exception("Reconciliation failed")
        sys.exit(1)

    if instance.observed is not None:
        print(dump_record(instance.observed))  # noqa: T201
    elif action is Action.DELETE:
        log.info("Deleted %s", parsed_args.command)
    else:
        log.warning("The %s does not exist on the server", parsed_args.command)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load `.env` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
