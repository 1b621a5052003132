"""Reporters for check results."""

from statewalk.reporters.console import ConsoleReporter

__all__ = ["ConsoleReporter"]
