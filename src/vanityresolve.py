"""vanityresolve - Resolve vanity import paths to their source repositories

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from constants import ExitCodes, OutputFormats
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from args import parse_args
from discovery.config import load_config
from discovery.errors import DiscoveryError
from discovery.resolver import repo_root_for_import_dynamic
from repository.known_hosts import resolve_one

logger = logging.getLogger(__name__)


def load_identifiers_file(file_name):
    """Loads identifiers from a file.

    Blank lines and lines starting with '#' are skipped.

    Args:
        file_name (str): File path containing the list of identifiers.

    Returns:
        list: List of identifiers
    """
    try:
        with open(file_name, encoding='utf-8') as file:
            lines = [line.strip() for line in file]
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except IOError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    return [line for line in lines if line and not line.startswith("#")]


def build_identifier_list(args):
    """Collects identifiers from the CLI arguments, preserving order and dropping duplicates."""
    identifiers = []
    if args.LIST_FROM_FILE:
        for file_name in args.LIST_FROM_FILE:
            identifiers.extend(load_identifiers_file(file_name))
    elif args.SINGLE:
        identifiers.extend(s.strip() for s in args.SINGLE)
    result = []
    for identifier in identifiers:
        if identifier and identifier not in result:
            result.append(identifier)
    return result


def build_config(args):
    """Loads the configuration file and applies CLI overrides on top of it."""
    try:
        config = load_config(args.CONFIG)
        return config.with_overrides(
            timeout=args.TIMEOUT,
            user_agent=args.USER_AGENT,
            insecure=args.INSECURE,
            module_mode=args.MODULE_MODE,
        )
    except FileNotFoundError as e:
        logging.error("Config file not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except ValueError as e:
        logging.error("Invalid configuration: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def resolve_all(identifiers, config, use_known_hosts=True):
    """Resolves every identifier, logging failures and continuing with the next.

    Returns:
        list: One dict per identifier with 'identifier', 'repo_root' and 'error'.
    """
    resolver = resolve_one if use_known_hosts else repo_root_for_import_dynamic
    results = []
    for identifier in identifiers:
        try:
            root = resolver(identifier, config)
            results.append({"identifier": identifier, "repo_root": root, "error": None})
        except DiscoveryError as e:
            logging.error("Failed to resolve %s: %s", identifier, e)
            results.append({
                "identifier": identifier,
                "repo_root": None,
                "error": {"type": type(e).__name__, "message": str(e)},
            })
    return results


def render_results(results, output_format):
    """Renders results as text lines or a JSON document."""
    if output_format == OutputFormats.JSON.value:
        return json.dumps(results, indent=2) + "\n"
    lines = []
    for r in results:
        if r["error"] is None:
            lines.append(f"{r['identifier']} -> {r['repo_root']}")
        else:
            lines.append(f"{r['identifier']} !! {r['error']['type']}: {r['error']['message']}")
    return "\n".join(lines) + ("\n" if lines else "")


def write_output(text, path=None):
    """Writes rendered output to a file or stdout."""
    if not path:
        sys.stdout.write(text)
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            file.write(text)
        logging.info("Results have been written to: %s", path)
    except OSError as e:
        logging.error("Unable to write %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    identifiers = build_identifier_list(args)
    if not identifiers:
        logging.warning("No identifiers found in the input list.")
        sys.exit(ExitCodes.FILE_ERROR.value)

    config = build_config(args)
    results = resolve_all(identifiers, config, use_known_hosts=not args.NO_KNOWN_HOSTS)
    write_output(render_results(results, args.OUTPUT_FORMAT), args.OUTPUT)

    failed = sum(1 for r in results if r["error"] is not None)
    if failed:
        logging.warning("%d of %d identifiers could not be resolved.", failed, len(results))
        sys.exit(ExitCodes.RESOLUTION_ERROR.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
