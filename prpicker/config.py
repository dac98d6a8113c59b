"""Configuration loading from YAML and environment.

The GitHub token comes from GITHUB_TOKEN or from a file named by
GITHUB_TOKEN_FILE (Docker secrets). Never put real tokens in config
files.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("~/.config/prpicker/config.yaml")


def _read_secret(env: Mapping[str, str], env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = env.get(env_key)
    if value:
        return value.strip()
    file_path = env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    per_page: int = Field(default=100, ge=1, le=100, description="Search page size (single page)")


class ChooserConfig(BaseSettings):
    """Chooser (fzf) and previewer (bat) settings."""

    model_config = SettingsConfigDict(env_prefix="PRPICKER_", extra="ignore")

    command: str = Field(default="fzf", description="Chooser executable")
    preview_command: str = Field(default="bat", description="Previewer executable")
    preview_args: list[str] = Field(
        default_factory=lambda: ["--color=always", "--line-range", ":500"],
        description="Previewer flags placed before the file path",
    )
    color: bool = Field(default=True, description="ANSI colours for status and title columns")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    chooser: ChooserConfig = Field(default_factory=ChooserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def github_token_resolved(self, env: Mapping[str, str] | None = None) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("$"):
            return t
        return _read_secret(os.environ if env is None else env, "GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    env (default: os.environ) only feeds ${VAR}/$VAR substitution in the
    YAML values. Fields the file leaves unset are still read from the
    process environment (GITHUB_*, PRPICKER_*, LOGGING_*) by
    pydantic-settings, so a missing file yields defaults plus those.
    """
    env = dict(os.environ) if env is None else dict(env)

    path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw, env)

    github = GitHubConfig(**(raw.get("github") or {}))
    chooser = ChooserConfig(**(raw.get("chooser") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(github=github, chooser=chooser, logging=logging)
