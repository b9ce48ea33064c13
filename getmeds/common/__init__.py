# Common utilities
from .config_loader import (
    Settings,
    build_settings,
    load_config,
    load_messages,
    load_retailers,
    load_settings,
)
from .errors import (
    ConfigurationError,
    GetMedsError,
    SearchFailedError,
    UpstreamError,
    ValidationError,
)
from .log_config import setup_logging
from .text_utils import absolutize_url, clean_text, is_placeholder_image
