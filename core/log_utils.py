#!/usr/bin/env python3
"""
core/log_utils.py: Logging helpers for the ptab command-line tool.

Every pipeline stage logs through its own `ptab.<topic>` logger, so debug
output can be switched on per stage from the command line.

This module contains:
- setup_logging: Configures the root logger and per-topic debug levels.
- ContextFilter: Tags log records with the document being processed.
- RichLogFormatter: Colored, column-aligned console output.
"""

import logging

PROJECT_NAME = "ptab"
TOPICS = ("source", "normalize", "tokenize", "classify", "merge", "config", "api")


def resolve_debug_topics(debug_topics: str) -> set[str]:
    """Expands a comma-separated list of topic prefixes ('all' for every topic)."""
    requested = [t.strip() for t in debug_topics.split(",") if t.strip()]
    if "all" in requested:
        return set(TOPICS)
    return {topic for topic in TOPICS for prefix in requested if topic.startswith(prefix)}


def setup_logging(level=logging.INFO, color_logs=False, debug_topics=None, log_file=None):
    """Configures the root logger, replacing any handlers installed before."""
    root_logger = logging.getLogger()
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)
        h.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(RichLogFormatter(use_color=color_logs))
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    app_log = logging.getLogger(PROJECT_NAME)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
            file_handler.setFormatter(RichLogFormatter(use_color=False))
            root_logger.addHandler(file_handler)
            app_log.info("Logging to file: %s", log_file)
        except OSError as e:
            app_log.error("Could not open log file %s: %s", log_file, e)

    # pdfminer reports every font and stream it parses at INFO.
    logging.getLogger("pdfminer").setLevel(logging.WARNING)

    if debug_topics:
        for topic in sorted(resolve_debug_topics(debug_topics)):
            logging.getLogger(f"{PROJECT_NAME}.{topic}").setLevel(logging.DEBUG)


class ContextFilter(logging.Filter):
    """Adds `record.context`, the name of the document being processed."""

    def __init__(self, context_str=""):
        super().__init__()
        self.context_str = context_str

    def filter(self, record):
        record.context = self.context_str
        return True


class RichLogFormatter(logging.Formatter):
    """
    Formats records as `LEVEL:topic   [document]: message`.

    The topic is the logger name without the `ptab.` prefix, padded to a
    fixed-width column. Loggers of other libraries show their top-level name.
    Tracebacks are prefixed line by line like the message itself.

    Args:
        use_color (bool): If True, ANSI color codes are used. Defaults to False.
    """

    TOPIC_WIDTH = 8
    LEVEL_COLORS = {
        logging.DEBUG: "\033[38;5;252m",  # Light Grey
        logging.INFO: "\033[38;5;111m",  # Pastel Blue
        logging.WARNING: "\033[38;5;229m",  # Pale Yellow
        logging.ERROR: "\033[38;5;210m",  # Soft Red
        logging.CRITICAL: "\033[38;5;217m",  # Light Magenta
    }

    def __init__(self, use_color=False):
        super().__init__()
        self.use_color = use_color
        self.bold = "\033[1m" if use_color else ""
        self.reset = "\033[0m" if use_color else ""

    def topic_of(self, record) -> str:
        project, _, topic = record.name.partition(".")
        if project == PROJECT_NAME and topic:
            name = topic
        else:
            name = project
        return name[: self.TOPIC_WIDTH]

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, "") if self.use_color else ""
        context = getattr(record, "context", "")
        context_str = f"[{context}]" if context else ""

        prefix = (
            f"{color}{record.levelname[:5]:<5}{self.reset}:"
            f"{self.bold}{self.topic_of(record):<{self.TOPIC_WIDTH}}{self.reset}"
            f"{context_str}: "
        )
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return "\n".join(f"{prefix}{line}" for line in message.split("\n"))
