# failscope/cli/main.py
import argparse
import logging
import sys

from failscope import __version__
from failscope.cli.commands import config_cmd, demo_cmd, kinds_cmd


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="failscope",
        description="failscope - structured error-kind propagation with guaranteed cleanup",
    )
    parser.add_argument("--version", action="version", version=f"failscope {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for INFO, -vv for DEBUG logging")

    subparsers = parser.add_subparsers(dest="command")
    demo_cmd.register_command(subparsers)
    kinds_cmd.register_command(subparsers)
    config_cmd.register_command(subparsers)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not getattr(args, "func", None):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
