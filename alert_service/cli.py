"""Command-line interface for the Alert Service.

Examples:
    alert-service send --title "DB down" --message "primary unreachable" \\
        --severity CRITICAL --target billing
    alert-service list --status FAILED
    alert-service stats
    alert-service serve --port 8080
"""

import argparse
import json
import logging
import sys

from .alert_store import AlertRequest, AlertSeverity, get_alert_store
from .channels import create_notifier_from_config
from .config import config
from .exceptions import AlertValidationError
from .lifecycle import AlertLifecycleEngine

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_engine() -> AlertLifecycleEngine:
    """Build an engine from environment configuration."""
    store = get_alert_store(db_path=config.ALERT_DB_PATH, db_url=config.ALERT_DB_URL)
    return AlertLifecycleEngine(store=store, notifier=create_notifier_from_config(config))


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def cmd_send(args, engine: AlertLifecycleEngine) -> int:
    request = AlertRequest(
        title=args.title,
        message=args.message,
        severity=args.severity,
        target_service=args.target,
    )
    alert = engine.create_alert(request)
    _print_json(alert.to_dict())
    return 0 if alert.status == "SENT" else 1


def cmd_list(args, engine: AlertLifecycleEngine) -> int:
    if args.status:
        alerts = engine.get_alerts_by_status(args.status)
    elif args.service:
        alerts = engine.get_alerts_by_service(args.service)
    elif args.severity:
        alerts = engine.get_alerts_by_severity(args.severity)
    else:
        alerts = engine.get_all_alerts()

    _print_json([a.to_dict() for a in alerts])
    return 0


def cmd_stats(args, engine: AlertLifecycleEngine) -> int:
    _print_json(engine.get_stats())
    return 0


def cmd_serve(args) -> int:
    from alert_api.app import run_dev_server

    run_dev_server(port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alert-service",
        description="Record alerts and dispatch them to target services",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Create and dispatch an alert")
    send.add_argument("--title", required=True)
    send.add_argument("--message", required=True)
    send.add_argument(
        "--severity",
        required=True,
        help=f"One of {', '.join(s.value for s in AlertSeverity)}",
    )
    send.add_argument("--target", required=True, help="Target service")

    list_parser = subparsers.add_parser("list", help="List stored alerts")
    group = list_parser.add_mutually_exclusive_group()
    group.add_argument("--status")
    group.add_argument("--service")
    group.add_argument("--severity")

    subparsers.add_parser("stats", help="Show alert counts by status")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--port", type=int, default=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "serve":
        return cmd_serve(args)

    engine = build_engine()
    commands = {
        "send": cmd_send,
        "list": cmd_list,
        "stats": cmd_stats,
    }

    try:
        return commands[args.command](args, engine)
    except AlertValidationError as e:
        logger.error(f"Invalid alert: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
