"""
Configuration Loader

Loads YAML configuration files for pipeline settings, retailer
definitions, and translated user-facing messages. Environment
variables (GETMEDS_*) override values from settings.yaml.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..models import RetailerConfig, SearchStrategy
from .constants import DEFAULT_ACCEPT_LANGUAGE, DEFAULT_USER_AGENT
from .errors import ConfigurationError


@dataclass
class RelaySettings:
    """Settings used by the relay server."""
    allowed_domains: List[str] = field(default_factory=list)
    sopharmacy_domain: str = "sopharmacy.bg"
    vmclub_landing_url: str = "https://sofia.vmclub.bg/"
    vmclub_search_url: str = "https://sofia.vmclub.bg/products/fast-search"


@dataclass
class Settings:
    """Pipeline settings."""
    relay_url: str = ""
    use_relay: bool = True
    min_query_length: int = 2
    request_timeout: float = 30.0
    language: str = "bg"
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    relay: RelaySettings = field(default_factory=RelaySettings)


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'retailers.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def build_settings(config: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build Settings from a parsed settings.yaml and environment overrides.

    Args:
        config: Parsed settings.yaml content
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings instance
    """
    if environ is None:
        environ = dict(os.environ)

    relay_config = config.get('relay') or {}
    vmclub_config = relay_config.get('vmclub') or {}
    relay = RelaySettings(
        allowed_domains=list(relay_config.get('allowed_domains', [])),
        sopharmacy_domain=relay_config.get('sopharmacy_domain', 'sopharmacy.bg'),
        vmclub_landing_url=vmclub_config.get('landing_url', RelaySettings.vmclub_landing_url),
        vmclub_search_url=vmclub_config.get('search_url', RelaySettings.vmclub_search_url),
    )

    settings = Settings(
        relay_url=config.get('relay_url', ''),
        use_relay=bool(config.get('use_relay', True)),
        min_query_length=int(config.get('min_query_length', 2)),
        request_timeout=float(config.get('request_timeout', 30)),
        language=config.get('language', 'bg'),
        user_agent=config.get('user_agent', DEFAULT_USER_AGENT),
        accept_language=config.get('accept_language', DEFAULT_ACCEPT_LANGUAGE),
        relay=relay,
    )

    if environ.get('GETMEDS_RELAY_URL'):
        settings.relay_url = environ['GETMEDS_RELAY_URL']
    if environ.get('GETMEDS_USE_RELAY'):
        settings.use_relay = _env_bool(environ['GETMEDS_USE_RELAY'])
    if environ.get('GETMEDS_REQUEST_TIMEOUT'):
        try:
            settings.request_timeout = float(environ['GETMEDS_REQUEST_TIMEOUT'])
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid GETMEDS_REQUEST_TIMEOUT: {environ['GETMEDS_REQUEST_TIMEOUT']}"
            ) from e
    if environ.get('GETMEDS_LANGUAGE'):
        settings.language = environ['GETMEDS_LANGUAGE']

    return settings


def load_settings() -> Settings:
    """
    Load pipeline settings from settings.yaml with environment overrides.

    Returns:
        Settings instance
    """
    return build_settings(load_config('settings.yaml'))


def parse_retailer(entry: Dict[str, Any]) -> RetailerConfig:
    """
    Convert one retailers.yaml entry into a RetailerConfig.

    Raises:
        ConfigurationError: If the name is missing or the strategy is unknown
    """
    name = entry.get('name')
    if not name:
        raise ConfigurationError(f"Retailer entry without a name: {entry}")

    strategy_name = entry.get('strategy', '')
    try:
        strategy = SearchStrategy(strategy_name)
    except ValueError as e:
        supported = ', '.join(s.value for s in SearchStrategy)
        raise ConfigurationError(
            f"Unknown strategy '{strategy_name}' for {name}. Supported: {supported}"
        ) from e

    return RetailerConfig(
        name=name,
        enabled=bool(entry.get('enabled', False)),
        strategy=strategy,
        origin=entry.get('origin', ''),
        search_url=entry.get('search_url', ''),
        availability_url=entry.get('availability_url', ''),
        product_url=entry.get('product_url', ''),
        relay_name=entry.get('relay_name', name.lower()),
        product_limit=int(entry.get('product_limit', 5)),
        image_enrichment_limit=int(entry.get('image_enrichment_limit', 3)),
    )


def load_retailers() -> List[RetailerConfig]:
    """
    Load retailer definitions in configuration order.

    Returns:
        List of RetailerConfig (enabled and disabled)
    """
    config = load_config('retailers.yaml')
    return [parse_retailer(entry) for entry in config.get('retailers', [])]


def load_messages(language: str = "bg") -> Dict[str, Any]:
    """
    Load translated user-facing messages.

    Falls back to Bulgarian when the language is not configured.

    Example:
        {
            'query_too_short': 'Моля, въведете поне {min_length} символа',
            'availability': {'available': 'Налично', ...},
            ...
        }
    """
    config = load_config('messages.yaml')
    messages = config.get('messages', {})
    return messages.get(language) or messages.get('bg', {})
