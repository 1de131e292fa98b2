"""POM reading and in-place rewriting."""

from .reader import PomModel, collect_reactor, detect_encoding, read_pom, read_pom_file, read_pom_text
from .rewriter import PomRewriter

__all__ = [
    "PomModel",
    "PomRewriter",
    "collect_reactor",
    "detect_encoding",
    "read_pom",
    "read_pom_file",
    "read_pom_text",
]
