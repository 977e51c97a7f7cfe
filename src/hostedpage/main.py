from __future__ import annotations

import argparse
import logging
from datetime import timedelta
from typing import Optional, Sequence

from .application.hosted_page import HostedPageService
from .application.token_issuer import TokenIssuer
from .env import get_settings
from .infrastructure.storage import build_token_store


def build_service() -> HostedPageService:
    """Wire settings, token store and issuer into a service."""
    settings = get_settings()
    issuer = TokenIssuer(
        build_token_store(settings),
        replay_window=timedelta(seconds=settings.replay_window_seconds),
    )
    return HostedPageService(settings, issuer)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Print a signed hosted page URL for the given request id."""
    parser = argparse.ArgumentParser(description=main.__doc__)
    parser.add_argument("id", help="Request identifier")
    parser.add_argument("--timestamp", type=int, help="Provider time in ms")
    parser.add_argument("--token", help="Use this token instead of issuing one")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    service = build_service()
    request = service.create(args.id, timestamp=args.timestamp, token=args.token)
    print(request.request_url())


if __name__ == "__main__":
    main()
