"""Runtime configuration.

Values come from the environment (optionally a ``.env`` file) and are
read when ``Config.from_env()`` is called, not at import time.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Config:
    data_dir: Path
    products_file: Path
    log_level: str

    @classmethod
    def from_env(cls) -> Config:
        data_dir = Path(os.getenv("BACKOFFICE_DATA_DIR", str(_DEFAULT_DATA_DIR)))
        products_file = Path(
            os.getenv("BACKOFFICE_PRODUCTS_FILE", str(data_dir / "products.json"))
        )
        return cls(
            data_dir=data_dir,
            products_file=products_file,
            log_level=os.getenv("BACKOFFICE_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
