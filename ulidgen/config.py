"""Config loading for ulidgen.

Reads `.ulidgen/config.yaml` (or `~/.ulidgen/config.yaml`).
Raises SystemExit on parse errors, an unsupported `version`, or invalid values.
If no config file is found, returns default values (safe to run without config).

Config search order:
  1. `config_path` argument (the CLI's --config flag)
  2. ULIDGEN_CONFIG environment variable (if set)
  3. `.ulidgen/config.yaml` (working directory)
  4. `~/.ulidgen/config.yaml` (home directory)

Environment variable overrides:
  ULIDGEN_LOG_LEVEL — overrides logging.level (takes precedence over config file value)
  ULIDGEN_CONFIG    — sets an explicit config file path to try first

Example:

    version: 1
    output:
      case: lower
    logging:
      level: DEBUG
      json: true
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import NoReturn, Optional

import yaml

from ulidgen.models.ulid import Case
from ulidgen.utils.logger import DEFAULT_LOG_LEVEL, get_logger

logger = get_logger(__name__)

# ─── Version constants ────────────────────────────────────────────────────────

SUPPORTED_CONFIG_VERSION = 1

SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})

# ─── Validation sets ─────────────────────────────────────────────────────────

VALID_CASES: frozenset[str] = frozenset(case.value for case in Case)

VALID_LOG_LEVELS: frozenset[str] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)

# Default config search paths (ULIDGEN_CONFIG env var prepended at runtime)
DEFAULT_CONFIG_PATHS = [
    ".ulidgen/config.yaml",
    os.path.expanduser("~/.ulidgen/config.yaml"),
]


# ─── Dataclasses ─────────────────────────────────────────────────────────────


@dataclass
class OutputConfig:
    """Default output casing; the CLI's --lowercase flag forces lower."""

    case: Case = Case.UPPER


@dataclass
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL
    json: bool = False


@dataclass
class Config:
    """Root configuration object populated from .ulidgen/config.yaml.

    All fields have safe defaults — ulidgen runs without any config file.
    """

    version: int = SUPPORTED_CONFIG_VERSION
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Optional[str] = None  # Path to the loaded config file

    @classmethod
    def defaults(cls) -> "Config":
        """Return a fully-default Config (no file required)."""
        return cls()

    @classmethod
    def from_dict(cls, raw: dict, path: Optional[str] = None) -> "Config":
        """Construct Config from a parsed YAML dict.

        Merges user-supplied values onto defaults; unknown keys are silently ignored.

        Raises:
            SystemExit(1): On invalid output.case or logging.level value.
        """
        # ── Output ────────────────────────────────────────────────────────────
        output_raw = raw.get("output") or {}
        case_value = str(output_raw.get("case", Case.UPPER.value)).lower()
        if case_value not in VALID_CASES:
            _fail(
                f"CONFIG ERROR: Invalid output.case: '{output_raw.get('case')}'. "
                f"Supported values: {sorted(VALID_CASES)}."
            )
        output = OutputConfig(case=Case(case_value))

        # ── Logging ───────────────────────────────────────────────────────────
        logging_raw = raw.get("logging") or {}
        level = _validate_log_level(
            logging_raw.get("level", DEFAULT_LOG_LEVEL), "logging.level"
        )
        logging_config = LoggingConfig(
            level=level,
            json=bool(logging_raw.get("json", False)),
        )

        return cls(
            version=raw.get("version", SUPPORTED_CONFIG_VERSION),
            output=output,
            logging=logging_config,
            path=path,
        )


# ─── Config loading ───────────────────────────────────────────────────────────


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and validate ulidgen configuration.

    Search order:
      1. ``config_path`` argument (if provided)
      2. ``ULIDGEN_CONFIG`` environment variable (if set)
      3. ``.ulidgen/config.yaml`` (current working directory)
      4. ``~/.ulidgen/config.yaml`` (home directory)

    If no file is found at any of these paths, returns default Config (not an error).
    If a file is found but invalid, writes error to stderr and raises SystemExit(1).

    After loading (or defaulting), ``ULIDGEN_LOG_LEVEL`` is applied as an override.

    Raises:
        SystemExit(1): On YAML parse error, non-mapping document, unsupported
                       version, invalid value, or invalid ``ULIDGEN_LOG_LEVEL``.
    """
    search_paths: list[str] = []
    if config_path:
        search_paths.append(config_path)
    env_config = os.environ.get("ULIDGEN_CONFIG")
    if env_config:
        search_paths.append(env_config)
    search_paths.extend(DEFAULT_CONFIG_PATHS)

    found_path: Optional[str] = None
    for candidate in search_paths:
        expanded = os.path.expanduser(candidate)
        if os.path.isfile(expanded):
            found_path = expanded
            break

    # ── No config file found ─────────────────────────────────────────────────
    if found_path is None:
        logger.debug("No config file found — using defaults", searched=search_paths)
        config = Config.defaults()
        _apply_env_overrides(config)
        return config

    # ── Parse config file ─────────────────────────────────────────────────────
    logger.debug("Loading config", path=found_path)

    try:
        with open(found_path) as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        _fail(
            f"CONFIG ERROR: Failed to parse {found_path}: {exc}\n"
            "Check the YAML syntax and try again."
        )
    except OSError as exc:
        _fail(f"CONFIG ERROR: Could not read {found_path}: {exc}")

    # Empty file: nothing to merge
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        _fail(
            f"CONFIG ERROR: {found_path} is not a valid YAML mapping.\n"
            "The config file must be a YAML dictionary at the top level."
        )

    # ── Version validation ────────────────────────────────────────────────────
    version = raw.get("version", SUPPORTED_CONFIG_VERSION)
    if version not in SUPPORTED_VERSIONS:
        _fail(
            f"CONFIG ERROR: Unsupported config version: {version}. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}."
        )

    config = Config.from_dict(raw, path=found_path)
    _apply_env_overrides(config)

    logger.debug(
        "Config loaded",
        path=found_path,
        version=config.version,
        case=config.output.case.value,
    )
    return config


def _apply_env_overrides(config: Config) -> None:
    """Apply environment variable overrides to a Config object in-place.

    Currently handles:
      ULIDGEN_LOG_LEVEL — overrides config.logging.level

    Raises:
        SystemExit(1): If ULIDGEN_LOG_LEVEL is set but not a valid level name.
    """
    env_level = os.environ.get("ULIDGEN_LOG_LEVEL")
    if env_level is not None:
        config.logging.level = _validate_log_level(env_level, "ULIDGEN_LOG_LEVEL")


def _validate_log_level(value: object, source: str) -> str:
    level = str(value).upper()
    if level not in VALID_LOG_LEVELS:
        _fail(
            f"CONFIG ERROR: Invalid {source}: '{value}'. "
            f"Supported values: {sorted(VALID_LOG_LEVELS)}."
        )
    return level


def _fail(msg: str) -> NoReturn:
    print(msg, file=sys.stderr)
    raise SystemExit(1)
