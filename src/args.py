"""Argument parsing functionality for vanityresolve."""

import argparse
from constants import Constants, ModuleMode, OutputFormats


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="vanityresolve",
        description=(
            "vanityresolve - Resolve vanity import paths to their source repositories"
        ),
        add_help=True,
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("-l", "--load_list",
                        dest="LIST_FROM_FILE",
                        help="Load identifiers from a file, one per line",
                        action="append", type=str)
    input_group.add_argument("-p", "--package",
                            dest="SINGLE",
                            help="Name a single identifier (may be repeated).",
                            action="append", type=str)

    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json, default: text)",
                        action="store",
                        type=str.lower,
                        default=OutputFormats.TEXT.value,
                        choices=[f.value for f in OutputFormats])
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (default: stdout)",
                        action="store",
                        type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"Per-request timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=float)
    parser.add_argument("--user-agent",
                        dest="USER_AGENT",
                        help=f"User-Agent header for discovery requests (default: {Constants.USER_AGENT})",
                        action="store",
                        type=str)
    parser.add_argument("--insecure",
                        dest="INSECURE",
                        help="Fall back to plain http when https discovery fails.",
                        action="store_true",
                        default=None)
    parser.add_argument("--ignore-mod",
                        dest="MODULE_MODE",
                        help="Ignore module-aware ('mod') meta tags.",
                        action="store_const",
                        const=ModuleMode.IGNORE.value)
    parser.add_argument("--no-known-hosts",
                        dest="NO_KNOWN_HOSTS",
                        help="Always use discovery, even for statically known hosts.",
                        action="store_true")

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

    return parser.parse_args(argv)
