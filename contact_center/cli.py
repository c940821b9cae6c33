"""CLI to run the workspace samples.

Usage:
    contact-center call-control  # answer, hold, retrieve, release, ACW
    contact-center book-callback  # book one callback
    contact-center search-targets [TERM]  # search workspace targets
    contact-center --mock call-control  # run against the simulated vendor
"""

import argparse
import asyncio
import logging
import sys

from contact_center.config import get_settings
from contact_center.logging_config import setup_logging
from contact_center.services.call_control import run_call_control
from contact_center.services.callback_booking import book_callback
from contact_center.services.callbacks_protocol import CallbackFailed
from contact_center.services.dependencies import (
    get_auth_service,
    get_callbacks_service,
    get_workspace_service,
)
from contact_center.services.errors import ContactCenterError
from contact_center.services.target_search import run_target_search

logger = logging.getLogger("contact_center")


async def _call_control(args: argparse.Namespace) -> int:
    settings = get_settings()
    await run_call_control(get_workspace_service(settings), get_auth_service(settings), settings)
    logger.info("Call control sequence completed")
    return 0


async def _book_callback(args: argparse.Namespace) -> int:
    settings = get_settings()
    outcome = await book_callback(get_callbacks_service(settings), settings)
    return 1 if isinstance(outcome, CallbackFailed) else 0


async def _search_targets(args: argparse.Namespace) -> int:
    settings = get_settings()
    await run_target_search(get_workspace_service(settings), settings, args.term)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Contact center workspace samples")
    parser.add_argument("--mock", action="store_true", default=None,
                        help="Use simulated vendor services (overrides USE_MOCK)")
    parser.add_argument("--live", dest="mock", action="store_false", default=None,
                        help="Use the real vendor APIs (overrides USE_MOCK)")
    parser.add_argument("--log-level", default=None,
                        help="Log level (default: LOG_LEVEL setting)")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("call-control", help="Drive one call to after-call work") \
        .set_defaults(handler=_call_control)
    commands.add_parser("book-callback", help="Book a callback") \
        .set_defaults(handler=_book_callback)
    search = commands.add_parser("search-targets", help="Search workspace targets")
    search.add_argument("term", nargs="?", default=None,
                        help="Search term (default: SEARCH_TERM setting)")
    search.set_defaults(handler=_search_targets)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.mock is not None:
        settings.use_mock = args.mock
    setup_logging(args.log_level)

    try:
        return asyncio.run(args.handler(args))
    except (ContactCenterError, TimeoutError) as exc:
        logger.error("%s", str(exc) or type(exc).__name__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
