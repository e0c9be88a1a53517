# src/waste_cycle/scripts/tokens.py
"""
Mint development identity tokens.

Signs a token with the configured key so a local backend accepts it, e.g.:

    python -m waste_cycle.scripts.tokens farmer-42 --name "Somchai" --email s@example.com
"""

import argparse
from datetime import timedelta

from waste_cycle.core.identity import create_identity_token


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Mint an identity token for local development")
    parser.add_argument("uid", help="Subject identifier to embed in the token")
    parser.add_argument("--name", default=None, help="Display name claim")
    parser.add_argument("--email", default=None, help="Email claim")
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = parser.parse_args(argv)

    expires = timedelta(minutes=args.minutes) if args.minutes else None
    token = create_identity_token(args.uid, name=args.name, email=args.email, expires_delta=expires)
    print(token)


if __name__ == "__main__":
    main()
