"""
Tag Logger - configuration inspector.

Prints the effective logger configuration and, for each name given on the
command line, the logger it resolves to:

    python main.py com.example.server.Handler com.other.Job
"""
import argparse
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.settings import settings
from modules.tag_logger import LoggerManager, Logger


def describe(logger: Logger) -> str:
    return f"{logger.level.name}:{logger.tag}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Show tagged logger resolution")
    parser.add_argument("names", nargs="*", help="Dotted names to resolve")
    args = parser.parse_args(argv)

    manager = LoggerManager.get_instance()

    print(f"Configuration file: {settings.LOGGER_PROPERTIES_NAME}")
    print(f"check-logcat-filter: {str(manager.check_platform_filter).lower()}")
    for key, logger in sorted(manager.loggers.items(), key=lambda item: item[0] or ""):
        print(f"  {key if key is not None else '<root>'} = {describe(logger)}")

    for name in args.names:
        print(f"{name} -> {describe(manager.get_logger(name))}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
