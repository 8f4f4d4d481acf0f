import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Data file settings
    data_file: str = os.getenv("LIBRARY_DATA_FILE", "books.csv")

    # CLI settings
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain")

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")
    debug: bool = _env_flag("DEBUG")

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Library Management System")

    def logging_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.WARNING)


settings = Settings()
