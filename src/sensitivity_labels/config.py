"""
Run configuration.

Every option is carried by an explicit Config value handed to the pipeline.
No module keeps global flags.

Environment (optionally from a .env file in the working directory):
    LABELS_TMP_DIR       extraction root (default: system temp dir)
    LABELS_RESOLVE_FILE  ID-to-name lookup file
    LABELS_LOG_FILE      additional log file

Command-line flags override environment values.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from sensitivity_labels.discovery import DEFAULT_EXTENSIONS


@dataclass(frozen=True)
class Config:
    """Options for one run of the label pipeline."""
    tmp_dir: Optional[str] = None
    verbose: bool = False
    labeled_only: bool = False
    summary: bool = False
    summary_format: str = "yaml"
    recursive: bool = False
    dry_run: bool = False
    keep_tmp: bool = False
    strict: bool = False
    resolve_file: Optional[str] = None
    log_file: Optional[str] = None
    extensions: Tuple[str, ...] = field(default=DEFAULT_EXTENSIONS)

    def with_overrides(self, **changes) -> "Config":
        """Return a copy with the non-None values in changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def config_from_env(dotenv_path: Optional[str] = None) -> Config:
    """
    Build a Config from environment variables.

    Args:
        dotenv_path: Explicit .env file (default: search from the working directory)

    Returns:
        Config with environment defaults applied
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))
    return Config(
        tmp_dir=os.getenv("LABELS_TMP_DIR") or None,
        resolve_file=os.getenv("LABELS_RESOLVE_FILE") or None,
        log_file=os.getenv("LABELS_LOG_FILE") or None,
    )
