import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .settings import get_settings, setup_logging
from .token_gen import SigningError, TokenVerificationError, decode_token, generate_token

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tokengen", description="Mint or verify an HS256 JWT.")
    parser.add_argument("subject", nargs="?", help="sub claim (default: JWT_SUBJECT)")
    parser.add_argument("--secret", help="HMAC key (default: JWT_SECRET)")
    parser.add_argument("--secret-encoding", choices=["utf8", "hex", "base64"])
    parser.add_argument("--lifetime", type=int, help="seconds until exp (default: TOKEN_LIFETIME)")
    parser.add_argument("--algorithm", help="default: JWT_ALGORITHM")
    parser.add_argument("--verify", metavar="TOKEN", help="verify TOKEN and print its claims")
    parser.add_argument("--no-verify-exp", action="store_true", help="accept expired tokens with --verify")
    parser.add_argument("--log-level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging(args.log_level or "INFO")
        logger.error("Bad settings: %s", e)
        return 1
    setup_logging(args.log_level or settings.log_level)

    secret = args.secret if args.secret is not None else settings.jwt_secret
    encoding = args.secret_encoding or settings.jwt_secret_encoding
    algorithm = args.algorithm or settings.jwt_algorithm

    if args.verify is not None:
        try:
            claims = decode_token(
                args.verify, secret,
                algorithms=[algorithm],
                verify_exp=not args.no_verify_exp,
                encoding=encoding,
            )
        except TokenVerificationError as e:
            logger.error("Verification failed: %s", e)
            return 1
        print(json.dumps(claims, separators=(",", ":")))
        return 0

    lifetime = args.lifetime if args.lifetime is not None else settings.token_lifetime
    try:
        token = generate_token(
            secret,
            subject=args.subject if args.subject is not None else settings.jwt_subject,
            lifetime=lifetime,
            algorithm=algorithm,
            encoding=encoding,
        )
    except SigningError as e:
        logger.error("Could not sign token: %s", e)
        return 1
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
