"""
Configuration module.

Settings live in ``<config dir>/config.yaml``. The configuration is loaded
once at startup into an UploaderConfig and handed explicitly to the
components that need it.
"""
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any, List

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError
from .logging import get_logger

logger = get_logger("qiniu_uploader.config")

CONFIG_DIR_ENV = "QINIU_UPLOADER_CONFIG_DIR"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_CONFIG_DIR = Path("~") / ".config" / "qu"

# Environment variables that override values from the config file
ENV_OVERRIDES = {
    "qiniu_access_key": "QINIU_ACCESS_KEY",
    "qiniu_secret_key": "QINIU_SECRET_KEY",
    "qiniu_bucket": "QINIU_BUCKET",
    "qiniu_domain": "QINIU_DOMAIN",
}

_BOOL_STRINGS = {"true": True, "yes": True, "on": True, "false": False, "no": False, "off": False}


@dataclass
class UploaderConfig:
    """
    Complete uploader configuration.

    Attributes:
        access_key: Qiniu access key
        secret_key: Qiniu secret key
        bucket: Target bucket name
        domain: Custom domain bound to the bucket (optional)
        hotkey_keys: Virtual key codes of the upload hotkey (85 = U)
        hotkey_ctrl: Hotkey requires Ctrl
        hotkey_shift: Hotkey requires Shift
        hotkey_alt: Hotkey requires Alt
        auto_copy_url: Copy the URL after upload
        show_progress: Show a progress bar while uploading
    """
    access_key: str = ""
    secret_key: str = ""
    bucket: str = ""
    domain: str = ""
    hotkey_keys: List[int] = field(default_factory=lambda: [85])
    hotkey_ctrl: bool = True
    hotkey_shift: bool = True
    hotkey_alt: bool = False
    auto_copy_url: bool = True
    show_progress: bool = True

    @property
    def is_configured(self) -> bool:
        """True when credentials and bucket are all set."""
        return bool(self.access_key and self.secret_key and self.bucket)

    @property
    def hotkey_display(self) -> Optional[str]:
        """Hotkey as ``Ctrl+Shift+U``, or None if no modifier is set."""
        modifiers = []
        if self.hotkey_ctrl:
            modifiers.append("Ctrl")
        if self.hotkey_shift:
            modifiers.append("Shift")
        if self.hotkey_alt:
            modifiers.append("Alt")
        if not modifiers:
            return None
        keys = [chr(code) if 32 < code < 127 else str(code)
                for code in self.hotkey_keys] or ["U"]
        return "+".join(modifiers + keys)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk key layout."""
        data = asdict(self)
        return {
            "qiniu_access_key": data["access_key"],
            "qiniu_secret_key": data["secret_key"],
            "qiniu_bucket": data["bucket"],
            "qiniu_domain": data["domain"],
            "hotkey_keys": list(data["hotkey_keys"]),
            "hotkey_ctrl": data["hotkey_ctrl"],
            "hotkey_shift": data["hotkey_shift"],
            "hotkey_alt": data["hotkey_alt"],
            "auto_copy_url": data["auto_copy_url"],
            "show_progress": data["show_progress"],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploaderConfig":
        """Create from the on-disk key layout, filling defaults for missing keys."""
        defaults = cls()
        hotkey_keys = data.get("hotkey_keys", defaults.hotkey_keys)
        if not isinstance(hotkey_keys, list):
            raise ConfigError(f"Invalid `hotkey_keys`; expected a list, got {hotkey_keys!r}")
        return cls(
            access_key=_as_str(data.get("qiniu_access_key"), defaults.access_key),
            secret_key=_as_str(data.get("qiniu_secret_key"), defaults.secret_key),
            bucket=_as_str(data.get("qiniu_bucket"), defaults.bucket),
            domain=_as_str(data.get("qiniu_domain"), defaults.domain),
            hotkey_keys=_as_key_codes(hotkey_keys),
            hotkey_ctrl=_as_bool(data, "hotkey_ctrl", defaults.hotkey_ctrl),
            hotkey_shift=_as_bool(data, "hotkey_shift", defaults.hotkey_shift),
            hotkey_alt=_as_bool(data, "hotkey_alt", defaults.hotkey_alt),
            auto_copy_url=_as_bool(data, "auto_copy_url", defaults.auto_copy_url),
            show_progress=_as_bool(data, "show_progress", defaults.show_progress),
        )


def _as_str(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value).strip()


def _as_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.strip().lower()]
    raise ConfigError(f"Invalid `{key}`; expected true or false, got {value!r}")


def _as_key_codes(values: List[Any]) -> List[int]:
    codes = []
    for value in values:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid `hotkey_keys`; expected key codes, got {values!r}")
        try:
            codes.append(int(value))
        except (TypeError, ValueError):
            raise ConfigError(
                f"Invalid `hotkey_keys`; expected key codes, got {values!r}"
            ) from None
    return codes


def get_config_dir(create: bool = True) -> Path:
    """
    Resolve the configuration directory.

    Args:
        create: Create the directory if it doesn't exist

    Returns:
        ``$QINIU_UPLOADER_CONFIG_DIR`` if set, else ``~/.config/qu``
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    config_dir = Path(override).expanduser() if override else DEFAULT_CONFIG_DIR.expanduser()
    if create:
        try:
            config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to create config directory {config_dir}: {e}") from e
    return config_dir


def get_config_path() -> Path:
    """Path of the YAML config file."""
    return get_config_dir() / CONFIG_FILE_NAME


def _read_config_file(cfg_path: Path) -> Dict[str, Any]:
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {cfg_path}: {e}") from None

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in {cfg_path}; expected a mapping.")
    return data


def load_config(path: Optional[Path] = None, load_env_file: bool = True) -> UploaderConfig:
    """
    Load configuration from file, defaults and environment.

    Precedence (highest first): QINIU_* environment variables, the YAML file,
    built-in defaults. A ``.env`` file in the working directory is loaded into
    the environment first without overriding variables already set.

    Args:
        path: Explicit config file path (default: get_config_path())
        load_env_file: Load ``.env`` from the working directory

    Returns:
        Loaded UploaderConfig

    Raises:
        ConfigError: If the file exists but cannot be parsed
    """
    if load_env_file:
        load_dotenv(Path.cwd() / ".env", override=False)

    cfg_path = path or get_config_path()
    data = _read_config_file(cfg_path)

    for key, env_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value and value.strip():
            data[key] = value.strip()

    config = UploaderConfig.from_dict(data)
    logger.debug(f"Loaded config from {cfg_path} (configured={config.is_configured})")
    return config


def save_config(config: UploaderConfig, path: Optional[Path] = None) -> Path:
    """
    Write configuration to the YAML file.

    Args:
        config: Configuration to persist
        path: Explicit config file path (default: get_config_path())

    Returns:
        Path the configuration was written to

    Raises:
        ConfigError: If the file cannot be written
    """
    cfg_path = path or get_config_path()
    try:
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        cfg_path.write_text(
            yaml.safe_dump(config.to_dict(), sort_keys=False, allow_unicode=True),
            encoding="utf-8"
        )
    except OSError as e:
        raise ConfigError(f"Failed to write config file {cfg_path}: {e}") from e

    logger.info(f"Saved config to {cfg_path}")
    return cfg_path
