# failscope/config/validator.py
"""
Configuration Validator

Validates configuration for misleading combinations.
Returns structured issues with level (warn/error), path, message, hint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal

from .loader import FailScopeConfig


@dataclass(frozen=True)
class ConfigIssue:
    """
    Configuration validation issue

    Structured output for CLI/logging.
    """
    level: Literal["warn", "error"]
    path: str  # e.g., "failscope.trace_path"
    message: str
    hint: str = ""

    def __str__(self) -> str:
        hint_str = f"\n   Hint: {self.hint}" if self.hint else ""
        return f"[{self.level}] [{self.path}] {self.message}{hint_str}"


def validate_config(config: FailScopeConfig) -> List[ConfigIssue]:
    """
    Validate configuration for illegal/misleading combinations.

    Returns:
        List of issues (warn/error level)
    """
    issues: List[ConfigIssue] = []

    if config.trace_path:
        target = Path(config.trace_path)
        if target.exists() and target.is_dir():
            issues.append(ConfigIssue(
                level="error",
                path="failscope.trace_path",
                message=f"trace_path points to a directory: {target}",
                hint="Use a file path such as ./scope-trace.jsonl",
            ))
        elif target.suffix not in ("", ".jsonl"):
            issues.append(ConfigIssue(
                level="warn",
                path="failscope.trace_path",
                message=f"trace_path has suffix '{target.suffix}', events are written as JSONL",
                hint="Rename to *.jsonl",
            ))

    if config.warn_undeclared and not config.log_unhandled:
        issues.append(ConfigIssue(
            level="warn",
            path="failscope.warn_undeclared",
            message="warn_undeclared has no effect when log_unhandled=false",
            hint="Set log_unhandled=true to see undeclared kinds",
        ))

    return issues
