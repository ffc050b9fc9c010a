import copy
import json
import os
from pathlib import Path
from typing import Dict, Any

from translink.logger import get_logger

logger = get_logger(__name__)

# Translation configuration constants
DEFAULT_CHUNK_SIZE = 500  # Maximum characters per chunk sent to a provider
DEFAULT_CACHE_SIZE = 100  # Maximum memoized translation results
DEFAULT_HISTORY_SIZE = 10  # Maximum remembered translations

# Provider configuration constants
BUILTIN_PROVIDER_TYPES = ["google_gtx", "mymemory", "libretranslate"]

PROVIDER_DEFAULTS = {
    "enabled": True,
    "max_retries": 1,
    "retry_delay": 1.0,
    "timeout": 15,
}

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"
CONFIG_ENV_VAR = "TRANSLINK_CONFIG"

# Default configuration template. Provider order is the fallback order.
DEFAULT_CONFIG = {
    "providers": [
        {
            "name": "google",
            "type": "google_gtx",
            "enabled": True,
            "api_url": "https://translate.googleapis.com/translate_a/single",
            "timeout": 15,
            "max_retries": 1,
        },
        {
            "name": "mymemory",
            "type": "mymemory",
            "enabled": True,
            "api_url": "https://api.mymemory.translated.net/get",
            "contact_email": "",
            "timeout": 15,
            "max_retries": 1,
        },
        {
            "name": "libretranslate",
            "type": "libretranslate",
            "enabled": True,
            "api_url": "https://libretranslate.de/translate",
            "api_key": "",
            "timeout": 15,
            "max_retries": 1,
        },
    ],
    "detection": {
        "remote_enabled": True,
        "api_url": "https://libretranslate.de/detect",
        "sample_chars": 200,
        # LibreTranslate reports confidence on a 0-100 scale
        "min_confidence": 50.0,
        "timeout": 10,
    },
    "translation": {
        "chunk_size": DEFAULT_CHUNK_SIZE,
        "cache_size": DEFAULT_CACHE_SIZE,
        "history_size": DEFAULT_HISTORY_SIZE,
        "ocr_cleanup": False,
    },
    "circuit_breaker": {
        "enabled": True,
        "failure_threshold": 3,
        "cooldown_seconds": 60,
    },
    "log_mode": "off",
}


def get_config_path() -> Path:
    """Return the config file path, honouring the TRANSLINK_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_FILE


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge override into a copy of base.

    Nested dicts are merged key by key; any other value (lists included)
    replaces the base value wholesale, so a configured provider list fully
    defines the fallback order.

    Args:
        base: Default configuration
        override: User configuration

    Returns:
        New merged dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def create_default_config(path: Path = None):
    """Create the default config.json file."""
    path = Path(path) if path else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=4, ensure_ascii=False)
    logger.info(f"Created default config file: {path}")


def load_config(path: Path = None) -> Dict[str, Any]:
    """Load the configuration, falling back to defaults on any problem."""
    path = Path(path) if path else get_config_path()

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            user_config = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {path}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)
    except OSError as e:
        logger.error(f"Failed to read config file {path}: {e}")
        logger.warning("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(user_config, dict):
        logger.warning(f"Config file {path} does not contain an object, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug(f"Configuration loaded from {path}")
    return merge_config(DEFAULT_CONFIG, user_config)


def save_config(config: Dict[str, Any], path: Path = None):
    """Save the configuration to the config file."""
    path = Path(path) if path else get_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save config to {path}: {e}")
        raise

    from translink.logger import clear_log_mode_cache
    clear_log_mode_cache()


def get_provider_configs(config: Dict[str, Any]) -> list:
    """
    Get enabled provider configurations in fallback order.

    Each entry is completed with PROVIDER_DEFAULTS; entries with an unknown
    type are skipped with a warning.
    """
    providers = []
    for entry in config.get('providers', []):
        if not isinstance(entry, dict):
            continue
        provider_config = {**PROVIDER_DEFAULTS, **entry}
        if not provider_config.get('enabled', True):
            logger.debug(f"Provider '{provider_config.get('name')}' disabled in config")
            continue
        provider_type = provider_config.get('type')
        if provider_type not in BUILTIN_PROVIDER_TYPES:
            logger.warning(f"Unknown provider type '{provider_type}' in config, skipping")
            continue
        provider_config.setdefault('name', provider_type)
        providers.append(provider_config)
    return providers


def initialize_app(path: Path = None):
    """
    Initialize the application.
    Writes the default config.json on first run so it can be edited.
    """
    path = Path(path) if path else get_config_path()
    logger.info("Initializing application...")
    if path.exists():
        logger.debug(f"Config file already exists at {path}")
        return
    try:
        create_default_config(path)
    except OSError as e:
        logger.warning(f"Could not write default config to {path}: {e}; running with built-in defaults")
