"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3


class ModuleMode(Enum):
    """How module-aware ("mod") discovery hints are treated.

    Args:
        Enum (string): Module handling mode.
    """

    PREFER = "prefer"
    IGNORE = "ignore"


class OutputFormats(Enum):
    """Output formats supported by the CLI.

    Args:
        Enum (string): Output format name.
    """

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "VANITYRESOLVE_LOG_LEVEL"
    REQUEST_TIMEOUT = 20  # Timeout in seconds for each discovery request
    USER_AGENT = "vanityresolve"

    # Discovery protocol
    DISCOVERY_QUERY = "go-get=1"
    DISCOVERY_META_NAME = "go-import"
    MODULE_VCS = "mod"
    SUPPORTED_CHARSETS = ("utf-8", "ascii")
    DEFAULT_SCHEMES = ("https",)
    INSECURE_SCHEMES = ("https", "http")
    DISALLOWED_REPO_SCHEMES = ("file",)
    BODY_CHUNK_SIZE = 4096

    # Statically known hosting services
    GITHUB_HOST = "github.com"
    GITHUB_URL_BASE = "https://github.com"

    CONFIG_SECTION = "discovery"
