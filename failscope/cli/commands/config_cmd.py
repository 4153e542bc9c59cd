# failscope/cli/commands/config_cmd.py
from __future__ import annotations

from pathlib import Path

from failscope.config import FailScopeConfig, validate_config
from failscope.core.errors import ConfigError


def register_command(subparsers):
    """Register the 'config' command and its arguments."""
    config_p = subparsers.add_parser("config", help="Show effective configuration and issues")
    config_p.add_argument("--path", help="YAML file to load instead of the default lookup")
    config_p.set_defaults(func=show_config)


def show_config(args) -> int:
    try:
        config = FailScopeConfig.from_yaml(Path(args.path) if args.path else None)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    for key, value in config.to_dict().items():
        print(f"{key:<18} {value}")

    issues = validate_config(config)
    if issues:
        print()
        for issue in issues:
            print(issue)
    return 1 if any(i.level == "error" for i in issues) else 0
