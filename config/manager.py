from pathlib import Path
from typing import Dict, Any, Optional, List
from config.types import HarnessSettings, EnvironmentVariables
import logging
import os


class EnvironmentManager:
    """
    Environment manager that resolves harness settings from defaults,
    a .env file and the process environment.
    """

    _instance = None

    # Default settings with their types
    DEFAULT_SETTINGS = {
        # UI target
        "base_url": ("https://the-internet.herokuapp.com", str),
        # API target
        "api_base_url": ("https://jsonplaceholder.typicode.com", str),
        # Wait settings
        "timeout": (10, int),
        "poll_interval": (0.5, float),
        # Browser session settings
        "browser_type": ("chrome", str),
        "headless": (True, bool),
        # HTTP client settings
        "http_pool_size": (5, int),
        "http_timeout": (30.0, float),
    }

    # Each setting can be set via its uppercase env var
    ENV_MAPPING = {setting.upper(): setting for setting in DEFAULT_SETTINGS.keys()}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize environment with default values"""
        self.env_variables = EnvironmentVariables()
        self.settings: Dict[str, Any] = {}
        self.loaded_env_file: Optional[Path] = None
        # Settings changed through set_setting; load() leaves these alone
        self._overrides = set()
        self.logger = logging.getLogger(__name__)

        for key, (default_value, _) in self.DEFAULT_SETTINGS.items():
            self.settings[key] = default_value

        self._load_from_env_file()

    def _convert_value(self, value: str, target_type: type) -> Any:
        """Convert string value to target type"""
        if target_type == bool:
            return value.strip().lower() in ("true", "1", "yes", "on")
        return target_type(value)

    def _apply_variable(self, key: str, value: str) -> None:
        """Record a raw variable and update the mapped setting, if any"""
        self.env_variables.set(key, value)

        setting_name = self.ENV_MAPPING.get(key)
        if setting_name is None:
            return

        _, target_type = self.DEFAULT_SETTINGS[setting_name]
        try:
            self.settings[setting_name] = self._convert_value(value, target_type)
        except ValueError:
            self.logger.warning(
                f"Ignoring invalid value for {key}: {value!r} (expected {target_type.__name__})"
            )

    def _env_file_candidates(self) -> List[Path]:
        """Return the .env locations probed, in priority order"""
        env_file_paths = [Path.cwd() / ".env"]

        # Safely handle home directory
        try:
            env_file_paths.append(Path.home() / ".env")
        except (RuntimeError, OSError):
            pass

        module_template = Path(__file__).parent / "templates" / "env.template"
        env_file_paths.append(module_template)
        return env_file_paths

    def _load_from_env_file(self):
        """Find and load variables from the first .env file found"""
        for env_path in self._env_file_candidates():
            if env_path.exists() and env_path.is_file():
                self.logger.debug(f"Loading environment from: {env_path}")
                self._parse_env_file(env_path)
                self.loaded_env_file = env_path
                return

        self.logger.debug("No .env file found, using default settings")

    def _parse_env_file(self, env_file_path: Path):
        """Parse a .env file and load variables into settings"""
        try:
            with open(env_file_path, "r") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()

                    # Remove quotes if present
                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    self._apply_variable(key, value)
        except OSError as e:
            self.logger.warning(f"Error reading .env file {env_file_path}: {e}")

    def load(self):
        """Load settings from the OS environment on top of the .env file.

        Components call this before reading settings, so it is safe to call
        repeatedly. Values set through ``set_setting`` are not overwritten.
        """
        for key, value in os.environ.items():
            if key in self.ENV_MAPPING and self.ENV_MAPPING[key] not in self._overrides:
                self._apply_variable(key, value)
        return self

    def get_setting(self, name: str, default: Any = None) -> Any:
        """Get a setting value by name"""
        return self.settings.get(name, default)

    def set_setting(self, name: str, value: Any) -> None:
        """Set a setting value, converting strings to the declared type"""
        if name not in self.DEFAULT_SETTINGS:
            raise KeyError(f"Unknown setting: {name}")

        _, target_type = self.DEFAULT_SETTINGS[name]
        if isinstance(value, str) and target_type is not str:
            value = self._convert_value(value, target_type)
        self.settings[name] = value
        self._overrides.add(name)

    def reset_setting(self, name: str) -> None:
        """Reset a setting to its default value"""
        if name not in self.DEFAULT_SETTINGS:
            raise KeyError(f"Unknown setting: {name}")
        self.settings[name] = self.DEFAULT_SETTINGS[name][0]
        self._overrides.discard(name)

    def get_settings(self) -> HarnessSettings:
        """Return a validated snapshot of all harness settings"""
        return HarnessSettings(**self.settings)

    def get_base_url(self) -> str:
        return self.get_setting("base_url")

    def get_api_base_url(self) -> str:
        return self.get_setting("api_base_url")

    def get_timeout(self) -> int:
        return self.get_setting("timeout")

    def get_browser_type(self) -> str:
        return self.get_setting("browser_type")

    def is_headless(self) -> bool:
        return self.get_setting("headless")


# Create singleton instance
env_manager = EnvironmentManager()
