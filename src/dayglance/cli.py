from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .bootstrap import configure_logging
from .config import get_settings
from .domain import ClientInputError, ScheduleError


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Render a user's day schedule as an SVG image.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API.")
    serve_parser.add_argument("--host", default=settings.http.host)
    serve_parser.add_argument("--port", type=int, default=settings.http.port)

    render_parser = subparsers.add_parser("render", help="Render one schedule to a file or stdout.")
    render_parser.add_argument("--user", required=True)
    render_parser.add_argument("--date", default="today", help='"today" or YYYY-MM-DD')
    render_parser.add_argument("--tz", default=settings.timetable.default_timezone)
    render_parser.add_argument("--start", help="window start override, HH:MM")
    render_parser.add_argument("--end", help="window end override, HH:MM")
    render_parser.add_argument("--output", type=Path, help="write the SVG here instead of stdout")

    return parser


def _render(args: argparse.Namespace) -> int:
    from .services import ScheduleRequest, ScheduleService, ServiceContext

    log = logging.getLogger(__name__)
    try:
        service = ScheduleService.from_context(ServiceContext())
        rendered = service.render(
            ScheduleRequest(user=args.user, date=args.date, tz=args.tz, start=args.start, end=args.end)
        )
    except ClientInputError as exc:
        log.error("%s", exc.message)
        return 2
    except ScheduleError as exc:
        log.error("[%s] %s", exc.category, exc.message)
        return 1

    if args.output:
        args.output.write_text(rendered.svg, encoding="utf-8")
        log.info("Wrote %s", args.output)
    else:
        sys.stdout.write(rendered.svg)
    return 0


def main() -> None:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "serve":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
    elif args.command == "render":
        sys.exit(_render(args))
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
