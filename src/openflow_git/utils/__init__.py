"""Pure parsers for git text output."""

from openflow_git.utils.commit_parser import (
    LOG_FORMAT,
    log_format_arg,
    parse_commits,
    parse_shortstat,
)
from openflow_git.utils.diff_parser import parse_diff, parse_hunk_header

__all__ = [
    "LOG_FORMAT",
    "log_format_arg",
    "parse_commits",
    "parse_diff",
    "parse_hunk_header",
    "parse_shortstat",
]
