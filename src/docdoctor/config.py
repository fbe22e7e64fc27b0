"""Configuration management for docdoctor.

Handles:
- .doc-doctor/config.yaml parsing
- Environment variable overrides
- .doc-doctor/ directory discovery
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import yaml


CONFIG_YAML = "config.yaml"
PROJECT_DIR = ".doc-doctor"
DEFAULT_DB_NAME = "problems.db"

ENV_DB = "DOC_DOCTOR_DB"
ENV_JSON = "DOC_DOCTOR_JSON"


@dataclass
class DocDoctorConfig:
    """User-facing config from config.yaml."""
    db: str = DEFAULT_DB_NAME
    json_output: bool = False
    verbose: bool = False

    @classmethod
    def load(cls, project_dir: str) -> DocDoctorConfig:
        """Load config.yaml from the project directory."""
        config_path = os.path.join(project_dir, CONFIG_YAML)
        cfg = cls()
        if os.path.exists(config_path):
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            cfg.db = data.get("db", DEFAULT_DB_NAME) or DEFAULT_DB_NAME
            cfg.json_output = bool(data.get("json", False))
            cfg.verbose = bool(data.get("verbose", False))

        if os.environ.get(ENV_JSON):
            cfg.json_output = os.environ[ENV_JSON].lower() in ("1", "true", "yes")

        return cfg

    def save(self, project_dir: str) -> None:
        """Save config to config.yaml."""
        config_path = os.path.join(project_dir, CONFIG_YAML)
        data: dict[str, Any] = {"db": self.db}
        if self.json_output:
            data["json"] = self.json_output
        if self.verbose:
            data["verbose"] = self.verbose

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def find_project_dir(start: str | None = None) -> str | None:
    """Walk up from start directory to find .doc-doctor/ directory.

    Returns absolute path to .doc-doctor/ directory, or None if not found.
    """
    if start is None:
        start = os.getcwd()
    current = os.path.abspath(start)
    while True:
        candidate = os.path.join(current, PROJECT_DIR)
        if os.path.isdir(candidate):
            return candidate
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def get_db_path(project_dir: str, config: DocDoctorConfig | None = None) -> str:
    """Get the full path to the SQLite database."""
    env_db = os.environ.get(ENV_DB)
    if env_db:
        return env_db
    db = config.db if config and config.db else DEFAULT_DB_NAME
    if os.path.isabs(db):
        return db
    return os.path.join(project_dir, db)
