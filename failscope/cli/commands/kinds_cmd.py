# failscope/cli/commands/kinds_cmd.py
from __future__ import annotations

from failscope.core.kinds import (
    ALIASED_KINDS,
    EarlyReturn,
    ErrorKind,
    KindCategory,
    NoError,
    category_of,
    errno_aliases,
    is_ambiguous_errno,
    kind_code,
)
from failscope.core.kinds.taxonomy import LIBRARY_BASE


def register_command(subparsers):
    """Register the 'kinds' command and its arguments."""
    kinds_p = subparsers.add_parser("kinds", help="List the error-kind taxonomy")
    kinds_p.add_argument(
        "--category",
        choices=[c.value for c in KindCategory],
        help="Only list kinds of this category",
    )
    kinds_p.set_defaults(func=list_kinds)


def list_kinds(args) -> int:
    wanted = KindCategory(args.category) if args.category else None

    print(f"{'KIND':<24} {'CODE':>8}  {'CATEGORY':<12} ERRNO")
    print("-" * 70)
    for sentinel in (NoError, EarlyReturn):
        if wanted in (None, KindCategory.CONTROL):
            print(f"{sentinel.name:<24} {kind_code(sentinel):>8}  {KindCategory.CONTROL.value:<12} -")

    for kind in ErrorKind:
        category = category_of(kind)
        if wanted is not None and category is not wanted:
            continue
        code = kind_code(kind)
        if code >= LIBRARY_BASE:
            names = "-"
        else:
            names = "/".join(errno_aliases(code)) or "?"
            if is_ambiguous_errno(code):
                names += "  (ambiguous)"
        print(f"{kind.name:<24} {code:>8}  {category.value:<12} {names}")

    if ALIASED_KINDS:
        print("\nCollapsed on this platform:")
        for name, member in ALIASED_KINDS.items():
            print(f"  {name} -> {member.name}")
    return 0
