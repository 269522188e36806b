"""Main entry point for the mdview markdown viewer."""

import argparse
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import shutil
import sys
from types import TracebackType
from typing import List

from mdocument.document_exceptions import DocumentError
from mdocument.document_parser import DocumentParser
from mdocument.document_printer import DocumentPrinter
from mdlayout.layout_engine import LayoutEngine
from mdviewer.viewer_app import ViewerApp
from mdviewer.viewer_frame import content_height
from mdviewer.viewer_session import DocumentSession, read_document
from mdviewer.viewer_settings import DEFAULT_SETTINGS_PATH, ViewerSettings
from terminal.terminal_input import TerminalInput
from terminal.terminal_screen import TerminalScreen, write_lines


def setup_logging() -> None:
    """Configure application logging with timestamped files and rotation."""
    # Create logs directory in user's home .mdview directory
    log_dir = os.path.expanduser("~/.mdview/logs")
    os.makedirs(log_dir, exist_ok=True)

    # Generate timestamp for log filename
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,  # 1MB
        backupCount=49,  # Keep 50 files total (current + 49 backups)
        encoding='utf-8'
    )

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)  # Sort by creation time

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Ignore errors removing old logs


def install_global_exception_handler() -> None:
    """Install a global exception handler for uncaught exceptions."""
    logger = logging.getLogger('GlobalExceptionHandler')

    def handle_exception(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None) -> None:
        """Handle uncaught exceptions and log them."""
        if issubclass(exc_type, KeyboardInterrupt):
            # Don't log keyboard interrupt
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
            stack_info=True
        )
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    sys.excepthook = handle_exception


def _positive_int(value: str) -> int:
    try:
        number = int(value)

    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid width: {value!r}") from e

    if number < 1:
        raise argparse.ArgumentTypeError(f"width must be at least 1: {number}")

    return number


def build_argument_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(prog="mdview", description="View a markdown file in the terminal.")
    parser.add_argument("path", help="markdown file to view")
    parser.add_argument("--dump", action="store_true", help="print the rendered document and exit")
    parser.add_argument("--dump-ast", action="store_true", help="print the parsed document tree and exit")
    parser.add_argument("--width", type=_positive_int, help="render width for --dump (default: terminal width)")
    parser.add_argument("--settings", help=f"settings file (default: {DEFAULT_SETTINGS_PATH})")
    return parser


def load_settings(path: str | None) -> ViewerSettings:
    """
    Load viewer settings, falling back to defaults on any problem.

    Args:
        path: Explicit settings file, or None for the default location

    Returns:
        The settings to use
    """
    logger = logging.getLogger("mdview")
    settings_path = path or DEFAULT_SETTINGS_PATH
    if path is None and not os.path.exists(settings_path):
        return ViewerSettings.create_default()

    try:
        return ViewerSettings.load(settings_path)

    except (OSError, ValueError) as e:
        logger.warning("failed to load settings from %s, using defaults: %s", settings_path, e)
        return ViewerSettings.create_default()


def dump(path: str, settings: ViewerSettings, width: int | None, as_ast: bool) -> None:
    """
    Print a document to standard output.

    Args:
        path: Markdown file
        settings: Viewer settings
        width: Render width; the terminal width if None
        as_ast: Print the parsed tree instead of the rendered lines

    Raises:
        DocumentError: If the file cannot be read or parsed
    """
    parser = DocumentParser(settings.tab_width)
    document = read_document(path, parser)
    if as_ast:
        for line in DocumentPrinter().format(document):
            print(line)

        return

    render_width = width if width is not None else shutil.get_terminal_size((80, 24)).columns
    engine = LayoutEngine(settings.layout_settings())
    write_lines(engine.layout(document, render_width), sys.stdout, width=render_width)


def run_viewer(path: str, settings: ViewerSettings) -> None:
    """
    Run the interactive viewer until the user quits.

    Args:
        path: Markdown file
        settings: Viewer settings

    Raises:
        DocumentError: If the file cannot be read or parsed at startup
    """
    parser = DocumentParser(settings.tab_width)
    engine = LayoutEngine(settings.layout_settings())

    # Load before touching the terminal so startup errors print normally
    cols, rows = shutil.get_terminal_size((80, 24))
    session = DocumentSession.open(path, parser, engine, cols, content_height(rows))

    with TerminalScreen() as screen, TerminalInput() as events:
        app = ViewerApp(session, screen, events, settings.poll_interval_ms)
        app.run()


def main(argv: List[str] | None = None) -> int:
    """Main function to run the application."""
    args = build_argument_parser().parse_args(argv)

    setup_logging()
    install_global_exception_handler()
    logger = logging.getLogger("mdview")

    settings = load_settings(args.settings)
    logging.getLogger().setLevel(settings.log_level)

    try:
        if args.dump or args.dump_ast:
            dump(args.path, settings, args.width, args.dump_ast)

        else:
            run_viewer(args.path, settings)

    except DocumentError as e:
        logger.error("cannot view %s: %s", args.path, e)
        print(f"mdview: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
