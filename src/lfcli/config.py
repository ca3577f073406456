"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for lfcli:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.langfuse/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Profile file** -- A single YAML file (``config.yml``) holding every
  named profile, deserialised into a :class:`~lfcli.models.ConfigFile`.
  Managed via :func:`load_config_file`, :func:`save_config_file`,
  :func:`set_profile` and :func:`get_profile`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the profile file into the effective
  :class:`~lfcli.models.Config`.

The profile file stores secret keys, so every write goes through
:func:`_atomic_write` and leaves the file readable by its owner only.
"""

from __future__ import annotations

import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from lfcli.exceptions import ConfigurationError
from lfcli.models import DEFAULT_HOST, DEFAULT_PROFILE, Config, ConfigFile, ProfileEntry

_APP_NAME = "langfuse"
_CONFIG_FILENAME = "config.yml"
_FILE_MODE = 0o600

ENV_PROFILE = "LANGFUSE_PROFILE"
ENV_PUBLIC_KEY = "LANGFUSE_PUBLIC_KEY"
ENV_SECRET_KEY = "LANGFUSE_SECRET_KEY"
ENV_HOST = "LANGFUSE_HOST"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/langfuse/`` (default ``~/.config/langfuse/``).
    On macOS/Windows: ``~/.langfuse/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/langfuse/`` (default ``~/.local/share/langfuse/``).
    On macOS/Windows: ``~/.langfuse/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def config_file_path() -> Path:
    """Path to the profile file."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. Its permissions are
    narrowed to ``0o600`` before any data is written, so the secrets it holds
    are never readable by other users, not even briefly.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        os.chmod(tmp_path, _FILE_MODE)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Profile file ---


def load_config_file() -> ConfigFile:
    """Load the profile file from the config directory.

    Returns:
        The deserialised :class:`~lfcli.models.ConfigFile`. If the file does
        not exist, an empty instance is returned.

    Raises:
        ConfigurationError: If the file exists but is not valid YAML or does
            not have the ``profiles`` mapping shape.
    """
    path = config_file_path()
    if not path.is_file():
        return ConfigFile()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return ConfigFile.model_validate(data or {})
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid config file at {path}: {exc}") from exc


def save_config_file(config_file: ConfigFile) -> Path:
    """Persist the profile file atomically with owner-only permissions.

    Returns:
        The path written to.
    """
    path = config_file_path()
    data = config_file.model_dump(mode="json", exclude_none=True)
    _atomic_write(path, yaml.safe_dump(data, default_flow_style=False, sort_keys=True))
    return path


def get_profile(name: str) -> Optional[ProfileEntry]:
    """Return the named profile, or ``None`` if it is not stored."""
    return load_config_file().profiles.get(name)


def set_profile(name: str, entry: ProfileEntry) -> Path:
    """Insert or replace a profile and save the file.

    Other profiles in the file are preserved.
    """
    config_file = load_config_file()
    config_file.profiles[name] = entry
    return save_config_file(config_file)


def list_profiles() -> list[str]:
    """Return all stored profile names, sorted alphabetically."""
    return sorted(load_config_file().profiles)


def mask_key(key: str) -> str:
    """Mask a key for display.

    Keys longer than eight characters keep their first eight; shorter keys
    are hidden entirely.

    >>> mask_key("pk-lf-1234567890")
    'pk-lf-12********'
    >>> mask_key("short")
    '*****'
    """
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:8]}********"


# --- Environment ---


def load_env_file(path: Optional[Path] = None) -> bool:
    """Load ``.env`` from the working directory (or *path*) into ``os.environ``.

    Variables already present in the real environment win.

    Returns:
        ``True`` if a file was found and loaded.
    """
    dotenv_path = path if path is not None else Path.cwd() / ".env"
    if not dotenv_path.is_file():
        return False
    return load_dotenv(dotenv_path, override=False)


def _env(name: str) -> Optional[str]:
    """Return an environment variable, treating the empty string as unset."""
    value = os.environ.get(name)
    return value or None


# --- Precedence resolution ---


def resolve_config(
    profile: Optional[str] = None,
    public_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    host: Optional[str] = None,
) -> Config:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (the arguments to this function)
        2. Environment variables (``LANGFUSE_PROFILE``,
           ``LANGFUSE_PUBLIC_KEY``, ``LANGFUSE_SECRET_KEY``, ``LANGFUSE_HOST``)
        3. The selected profile in ``config.yml``
        4. Defaults (profile ``default``, host ``https://cloud.langfuse.com``)

    A profile file that cannot be read is treated as empty here; the
    ``config`` commands surface the problem instead. The returned config may
    still lack keys; check :meth:`~lfcli.models.Config.is_valid`.
    """
    profile_name = profile or _env(ENV_PROFILE) or DEFAULT_PROFILE

    try:
        stored = load_config_file().profiles.get(profile_name)
    except ConfigurationError:
        stored = None
    if stored is None:
        stored = ProfileEntry()

    return Config(
        public_key=public_key or _env(ENV_PUBLIC_KEY) or stored.public_key or None,
        secret_key=secret_key or _env(ENV_SECRET_KEY) or stored.secret_key or None,
        host=host or _env(ENV_HOST) or stored.host or DEFAULT_HOST,
        profile=profile_name,
    )
