"""
Huawei Dongle Client - Configuration Loader

This module loads device connection settings from multiple sources with
cascading priority: environment variables → config file → defaults.
Passwords can be kept out of the config file in the OS keyring.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import DongleConfig

logger = logging.getLogger("huawei-dongle")

# Profile fields persisted in the config file besides the password
PROFILE_FIELDS = (
    "url",
    "username",
    "timeout",
    "max_retries",
    "retry_delay",
    "max_retry_delay",
    "verify_ssl",
    "max_requests_per_second",
)


class ConfigLoader:
    """
    Configuration loader for device connection profiles.

    Priority order:
    1. Environment variables (highest priority) - for scripts and containers
    2. Config file (~/.huawei-dongle/config.json) - for multiple profiles
    3. Defaults (http://192.168.8.1, no credentials)

    Security features:
    - Automatic file permission enforcement (0600)
    - Passwords stored in the OS keyring when available
    - No credential logging
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".huawei-dongle"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"
    REQUIRED_FILE_PERMISSIONS = 0o600
    KEYRING_SERVICE_NAME = "huawei-dongle-client"

    @classmethod
    def load(cls, profile: str = "default") -> DongleConfig:
        """
        Load the device configuration for the specified profile.

        Args:
            profile: Profile name to load (default: "default")

        Returns:
            DongleConfig for the profile

        Raises:
            ConfigurationError: If a configuration source holds invalid settings
        """
        logger.debug(f"Loading configuration for profile: {profile}")

        # Priority 1: Environment variables
        config = cls._load_from_env(profile)
        if config:
            logger.info("Loaded configuration from environment variables")
            return config

        # Priority 2: Config file
        config = cls._load_from_config_file(profile)
        if config:
            logger.info(f"Loaded configuration for profile '{profile}' from config file")
            return config

        # Priority 3: Defaults
        logger.info(f"No configuration found for profile '{profile}', using defaults")
        return DongleConfig(password=cls._load_password_from_keyring(profile))

    @classmethod
    def _load_from_env(cls, profile: str) -> Optional[DongleConfig]:
        """Load configuration from environment variables."""
        url = os.getenv("HUAWEI_DONGLE_URL")
        if not url:
            return None

        settings: Dict[str, Any] = {
            "url": url,
            "username": os.getenv("HUAWEI_DONGLE_USERNAME"),
            "password": os.getenv("HUAWEI_DONGLE_PASSWORD") or cls._load_password_from_keyring(profile),
            "verify_ssl": os.getenv("HUAWEI_DONGLE_VERIFY_SSL", "true").lower() in ("true", "1", "yes"),
        }
        timeout = os.getenv("HUAWEI_DONGLE_TIMEOUT")
        if timeout:
            settings["timeout"] = timeout

        try:
            return DongleConfig(**settings)
        except ValidationError as e:
            logger.error(f"Invalid settings in environment variables: {e}")
            raise ConfigurationError(f"Invalid settings in environment variables: {e}")

    @classmethod
    def _load_from_config_file(cls, profile: str) -> Optional[DongleConfig]:
        """Load configuration from config file."""
        config_data = cls._read_config_file()
        if config_data is None:
            logger.debug(f"Config file not found: {cls.DEFAULT_CONFIG_FILE}")
            return None

        if profile not in config_data:
            logger.debug(f"Profile '{profile}' not found in config file")
            return None

        profile_config = dict(config_data[profile])
        if not profile_config.get("password"):
            profile_config["password"] = cls._load_password_from_keyring(profile)

        try:
            return DongleConfig(**profile_config)
        except ValidationError as e:
            logger.error(f"Invalid profile '{profile}' in config file: {e}")
            raise ConfigurationError(f"Invalid profile '{profile}' in config file: {e}")

    @classmethod
    def _load_password_from_keyring(cls, profile: str) -> Optional[str]:
        try:
            return keyring.get_password(cls.KEYRING_SERVICE_NAME, profile)
        except KeyringError as e:
            logger.debug(f"Could not load password from keyring: {e}")
            return None

    @classmethod
    def save_profile(
        cls, profile: str, config: DongleConfig, store_password_in_keyring: bool = True
    ) -> None:
        """
        Save configuration profile to config file.

        Args:
            profile: Profile name
            config: Device configuration to save
            store_password_in_keyring: Keep the password in the OS keyring instead
                of the config file; falls back to the file if the keyring fails

        Raises:
            ConfigurationError: If the existing config file is unreadable
        """
        config_file = cls.DEFAULT_CONFIG_FILE
        config_file.parent.mkdir(parents=True, exist_ok=True)

        config_data = cls._read_config_file() or {}

        profile_data = {field: getattr(config, field) for field in PROFILE_FIELDS}

        if config.password:
            if store_password_in_keyring and cls._store_password_in_keyring(profile, config.password):
                logger.debug(f"Stored password for profile '{profile}' in keyring")
            else:
                profile_data["password"] = config.password

        config_data[profile] = profile_data
        cls._write_config_file(config_data)

        logger.info(f"Saved profile '{profile}' to config file")

    @classmethod
    def _store_password_in_keyring(cls, profile: str, password: str) -> bool:
        try:
            keyring.set_password(cls.KEYRING_SERVICE_NAME, profile, password)
        except KeyringError as e:
            logger.warning(f"Could not store password in keyring, keeping it in the config file: {e}")
            return False
        return True

    @classmethod
    def delete_profile(cls, profile: str) -> None:
        """
        Delete a profile from config file and its password from the keyring.

        Args:
            profile: Profile name to delete

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        config_data = cls._read_config_file()
        if config_data is None:
            raise ConfigurationError(f"Config file not found: {cls.DEFAULT_CONFIG_FILE}")

        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        del config_data[profile]
        cls._write_config_file(config_data)

        try:
            keyring.delete_password(cls.KEYRING_SERVICE_NAME, profile)
        except PasswordDeleteError:
            logger.debug(f"No keyring password stored for profile '{profile}'")
        except KeyringError as e:
            logger.warning(f"Could not remove keyring password for profile '{profile}': {e}")

        logger.info(f"Deleted profile '{profile}' from config file")

    @classmethod
    def list_profiles(cls) -> List[str]:
        """
        List all configured profiles.

        Returns:
            List of profile names
        """
        config_data = cls._read_config_file()
        if config_data is None:
            return []
        return list(config_data.keys())

    @classmethod
    def get_profile_info(cls, profile: str) -> Dict[str, Any]:
        """
        Get non-sensitive information about a profile.

        Args:
            profile: Profile name

        Returns:
            Dictionary with URL, username, verify_ssl and where the password lives

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        config_data = cls._read_config_file()
        if config_data is None:
            raise ConfigurationError(f"Config file not found: {cls.DEFAULT_CONFIG_FILE}")

        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        profile_config = config_data[profile]
        if profile_config.get("password"):
            password_source = "config file"
        elif cls._load_password_from_keyring(profile):
            password_source = "keyring"
        else:
            password_source = "none"

        return {
            "url": profile_config["url"],
            "username": profile_config.get("username"),
            "verify_ssl": profile_config.get("verify_ssl", True),
            "timeout": profile_config.get("timeout"),
            "password_source": password_source,
        }

    @classmethod
    def _read_config_file(cls) -> Optional[Dict[str, Any]]:
        config_file = cls.DEFAULT_CONFIG_FILE
        if not config_file.exists():
            return None

        # Verify file permissions for security
        cls._verify_file_permissions(config_file)

        try:
            with open(config_file, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            raise ConfigurationError(f"Invalid JSON in config file: {e}")

    @classmethod
    def _write_config_file(cls, config_data: Dict[str, Any]) -> None:
        config_file = cls.DEFAULT_CONFIG_FILE
        with open(config_file, 'w') as f:
            json.dump(config_data, f, indent=2)

        cls._set_secure_permissions(config_file)

    @classmethod
    def _set_secure_permissions(cls, file_path: Path) -> None:
        """Set secure file permissions (0600 - owner read/write only)."""
        try:
            os.chmod(file_path, cls.REQUIRED_FILE_PERMISSIONS)
            logger.debug(f"Set secure permissions on {file_path}")
        except OSError as e:
            logger.warning(f"Could not set secure permissions on {file_path}: {e}")

    @classmethod
    def _verify_file_permissions(cls, file_path: Path) -> None:
        """Verify file has secure permissions and fix them if not."""
        try:
            current_perms = os.stat(file_path).st_mode & 0o777
        except OSError as e:
            logger.debug(f"Could not verify file permissions: {e}")
            return

        if current_perms != cls.REQUIRED_FILE_PERMISSIONS:
            logger.warning(
                f"Config file {file_path} has insecure permissions {oct(current_perms)}. "
                f"Recommended: {oct(cls.REQUIRED_FILE_PERMISSIONS)}"
            )
            cls._set_secure_permissions(file_path)
