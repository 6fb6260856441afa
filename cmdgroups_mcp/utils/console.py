"""Colorful console logging formatter."""

import logging
import re
from datetime import datetime

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

COMPONENT_COLORS = {
    "cmdgroups_mcp.server": COLORS["bright_cyan"],
    "cmdgroups_mcp.services.runner": COLORS["bright_magenta"],
    "cmdgroups_mcp.services.orchestrator": COLORS["bright_blue"],
    "cmdgroups_mcp.services": COLORS["cyan"],
    "cmdgroups_mcp.middleware": COLORS["yellow"],
    "cmdgroups_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

PREFIX = "cmdgroups_mcp."

_DURATION_RE = re.compile(r"(\d+\.?\d*m?s)\b")
_PID_RE = re.compile(r"(pid[ =]\d+)")
_UUID_RE = re.compile(r"\b([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})\b")
_URI_RE = re.compile(r"(\w+://[^\s]+)")


class ColorfulFormatter(logging.Formatter):
    """Log formatter with aligned columns and optional ANSI colors."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        # Longest matching prefix wins
        best = ""
        for prefix in COMPONENT_COLORS:
            if prefix != "default" and name.startswith(prefix) and len(prefix) > len(best):
                best = prefix
        return COMPONENT_COLORS[best] if best else COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d} {dt:%m/%d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(PREFIX):
            name = name[len(PREFIX):]
        return self._colorize(f"{name:<24}", self._get_component_color(record.name))

    def format(self, record: logging.LogRecord) -> str:
        """Format as ``time | LEVEL | component | message``."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight pids, ids, URIs and durations."""
        if not self.use_colors:
            return message

        message = _URI_RE.sub(f"{COLORS['bright_blue']}\\1{COLORS['reset']}", message)
        message = _UUID_RE.sub(f"{COLORS['cyan']}\\1{COLORS['reset']}", message)
        message = _PID_RE.sub(f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message)
        message = _DURATION_RE.sub(f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message)
        return message


class MCPRequestFormatter(ColorfulFormatter):
    """Formatter that prefixes lifecycle and failure events with a marker."""

    MARKERS = (
        (("starting", "ready", "started"), "bright_green", ">>>"),
        (("shutting down", "shutdown"), "bright_red", "<<<"),
        (("error", "failed", "timed out"), "bright_red", "!! "),
        (("warning", "slow"), "bright_yellow", "!  "),
        (("completed", "succeeded", "imported"), "bright_green", "OK "),
        (("created", "added"), "bright_cyan", "+  "),
        (("deleted", "terminated"), "bright_yellow", "-  "),
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format with a leading event marker when colors are on."""
        base = super().format(record)
        if not self.use_colors:
            return base

        message = record.getMessage().lower()
        for keywords, color, marker in self.MARKERS:
            if any(k in message for k in keywords):
                return f"{COLORS[color]}{marker}{COLORS['reset']} {base}"
        return f"    {base}"
