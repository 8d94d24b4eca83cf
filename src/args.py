"""Argument parsing functionality for Dropper."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="dropper",
        description=(
            "Dropper - A Minecraft plugin package manager. "
            "Specifiers: Name, Name@*, Name@6.*, Name@6.1.*, Name@6.1.9"
        ),
        add_help=True,
    )

    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("-p", "--package",
                            dest="SINGLE",
                            help="Package specifier to resolve (repeatable).",
                            action="append", type=str)
    input_group.add_argument("-s", "--search",
                            dest="SEARCH",
                            help="Search the plugin repository for a keyword.",
                            action="store", type=str)

    parser.add_argument("-g", "--game-version",
                        dest="GAME_VERSION",
                        help="Only consider releases for this game version, i.e: 1.12",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to a JSON file receiving the resolution results",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="HTTP request timeout in seconds",
                        action="store",
                        type=int)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-missing",
                        dest="ERROR_ON_MISSING",
                        help="Exit with a non-zero status code if a package version is not found.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
