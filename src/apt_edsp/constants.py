"""Constants used in the project."""


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROTOCOL_VERSION = "EDSP 0.5"
    PERCENTAGE_MIN = 0
    PERCENTAGE_MAX = 100

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_LOG_LEVEL = "WARNING"

    ENV_LOG_LEVEL = "EDSP_LOG_LEVEL"
    ENV_LOG_FILE = "EDSP_LOG_FILE"
    ENV_CONFIG = "EDSP_CONFIG"

    # Flush the output stream after every stanza written by ResponseWriter.
    WRITER_FLUSH = True
