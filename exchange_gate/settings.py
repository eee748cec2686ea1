import codecs
import os

from dotenv import load_dotenv

# Load .env file variables into environment
load_dotenv(verbose=True)


def resolve_encoding(encoding: str) -> str:
    """Returns the canonical codec name for `encoding`.

    Raises:
        ValueError: If `encoding` names a codec Python does not know.
    """
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        raise ValueError(f"'{encoding}' is not a known text encoding.")


class Settings:
    """Application configuration settings loaded from environment variables."""

    # --- Response Settings ---
    RESPONSE_ENCODING: str = "utf-8"
    DEFAULT_CONTENT_TYPE: str = "text/plain"

    # --- Logging Settings ---
    def get_log_level(self, default: str = "INFO") -> str:
        """Gets the configured log level, defaulting if not set."""
        return os.getenv("LOG_LEVEL", default).upper()

    # --- Response Settings Getters using os.getenv ---
    def get_response_encoding(self) -> str:
        """Returns the text encoding used for response body writes.

        Raises:
            ValueError: If RESPONSE_ENCODING names a codec Python does not know.
        """
        encoding = os.getenv("RESPONSE_ENCODING", self.RESPONSE_ENCODING)
        try:
            return resolve_encoding(encoding)
        except ValueError:
            raise ValueError(f"RESPONSE_ENCODING '{encoding}' is not a known text encoding.")

    def get_default_content_type(self) -> str:
        """Returns the Content-Type applied to responses that do not set one."""
        return os.getenv("DEFAULT_CONTENT_TYPE", self.DEFAULT_CONTENT_TYPE)

    def get_run_mode(self) -> str:
        """Returns the run mode, defaulting to 'prod' if not set."""
        return os.getenv("RUN_MODE", "prod")

    def dev_mode(self) -> bool:
        """Returns True if the run mode is 'dev', False otherwise."""
        return self.get_run_mode() == "dev"
