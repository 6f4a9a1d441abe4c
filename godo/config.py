"""Configuration loading and management for godo."""

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .core.exceptions import ConfigFileError, ConfigValidationError
from .core.settings import CONFIG_DIR_NAME, CONFIG_FILE_NAME, find_config_file, load_settings

# Config keys that can be set via `godo-config set`
CONFIGURABLE_KEYS = {
    "launch.split_policy": {
        "type": str,
        "default": "heuristic",
        "choices": ["heuristic", "separator"],
        "description": "How arguments are split (heuristic: first non-flag is the package; "
        'separator: package follows "--")',
    },
    "launch.mode": {
        "type": str,
        "default": "exec",
        "choices": ["exec", "spawn"],
        "description": "Replace the godo process (exec) or run the command as a child (spawn)",
    },
    "launch.announce": {
        "type": bool,
        "default": True,
        "description": "Print 'godo: starting <command>' before running it",
    },
    "staging.dir": {
        "type": str,
        "default": None,
        "description": "Directory built executables are written to (default: $GOPATH/godo)",
    },
    "staging.strategy": {
        "type": str,
        "default": "copy-aside",
        "choices": ["copy-aside", "direct"],
        "description": "Exec a private per-process copy (copy-aside) or the shared build output (direct)",
    },
    "build.go": {
        "type": str,
        "default": "go",
        "description": "Go command used to build packages",
    },
    "build.tty": {
        "type": bool,
        "default": True,
        "description": "Send build output to the controlling terminal when one is available",
    },
    "build.fetch": {
        "type": bool,
        "default": False,
        "description": "Run 'go get -d' for import-path specs before building",
    },
    "env.strip": {
        "type": list,
        "default": ["GODEBUG"],
        "description": "Variables removed from the build environment (comma-separated)",
    },
    "env.output_var": {
        "type": str,
        "default": "GOBIN",
        "description": "Variable pinned to the staging directory during the build",
    },
    "env.strip_exec": {
        "type": bool,
        "default": False,
        "description": "Also remove env.strip variables from the launched command's environment",
    },
    "resolve.roots": {
        "type": list,
        "default": [],
        "description": "Package roots searched for import paths (default: $GOPATH/src, $GOROOT/src)",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "choices": ["debug", "info", "warning", "error"],
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to ~/.godo/godo.log",
    },
}


def _get_default_config() -> dict:
    """Get default config from Pydantic models."""
    from .core.models.config import GodoConfig

    return GodoConfig().to_dict()


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'staging.strategy'."""
    for part in key.split("."):
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def _set_nested(d: dict, key: str, value):
    """Set a nested key like 'staging.strategy'."""
    parts = key.split(".")
    for part in parts[:-1]:
        if part not in d:
            d[part] = {}
        d = d[part]
    d[parts[-1]] = value


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def get_config_path_for_write(start_dir: str | None = None) -> Path:
    """
    Get the path where config should be written.

    Prefers an existing .godo/config.toml, otherwise creates one in
    start_dir or cwd.
    """
    existing = find_config_file(start_dir)
    if existing and existing.name == CONFIG_FILE_NAME:
        return existing

    base = Path(start_dir) if start_dir else Path.cwd()
    config_dir = base / CONFIG_DIR_NAME
    config_dir.mkdir(exist_ok=True)
    return config_dir / CONFIG_FILE_NAME


def _format_toml_value(val: Any) -> str:
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, list):
        items = ", ".join(_format_toml_value(v) for v in val)
        return f"[{items}]"
    if isinstance(val, str):
        escaped = val.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return str(val)


def save_config(config: dict, config_path: Path) -> None:
    """
    Save configuration to a .godo/config.toml file.

    Only saves non-default values.
    """
    lines: list[str] = []
    defaults = _get_default_config()

    for section, section_defaults in defaults.items():
        section_lines = []
        for key, val in config.get(section, {}).items():
            if val is None or val == section_defaults.get(key):
                continue
            section_lines.append(f"{key} = {_format_toml_value(val)}")
        if section_lines:
            lines.append(f"[{section}]")
            lines.extend(section_lines)
            lines.append("")

    config_path.write_text("\n".join(lines))


def _read_config_file(config_path: Path) -> dict:
    """Values stored in config_path alone, without environment overrides."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigFileError(
            f"Failed to read config file: {e}", file_path=str(config_path), cause=e
        ) from e


def config_get(key: str, start_dir: str | None = None):
    """Get a config value."""
    config = load_config(start_dir=start_dir)
    return _get_nested(config, key)


def config_set(key: str, value: str, start_dir: str | None = None):
    """Set a config value and save it to .godo/config.toml."""
    if key not in CONFIGURABLE_KEYS:
        raise ConfigValidationError(
            f"Unknown config key: {key}. Valid keys: {', '.join(CONFIGURABLE_KEYS.keys())}",
            key=key,
        )

    key_info = CONFIGURABLE_KEYS[key]
    typed_value: Any

    if key_info["type"] is bool:
        if value.lower() in ("true", "1", "yes", "on"):
            typed_value = True
        elif value.lower() in ("false", "0", "no", "off"):
            typed_value = False
        else:
            raise ConfigValidationError(f"Invalid boolean value: {value}", key=key, value=value)
    elif key_info["type"] is list:
        typed_value = [v.strip() for v in value.split(",") if v.strip()]
    else:
        choices = key_info.get("choices")
        if choices and value not in choices:
            raise ConfigValidationError(
                f"Invalid value for {key}: {value}. Valid values: {', '.join(choices)}",
                key=key,
                value=value,
            )
        typed_value = value

    config_path = get_config_path_for_write(start_dir)
    config = _read_config_file(config_path)
    _set_nested(config, key, typed_value)

    save_config(config, config_path)

    return config_path, typed_value


def config_list():
    """List all configurable keys with descriptions."""
    return CONFIGURABLE_KEYS
