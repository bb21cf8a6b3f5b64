"""
Configuration loading for vc_release_helper.

Provides access to the per-user preferences file. See
:mod:`vc_release_helper.config.loader` for implementation details.
"""

from .loader import (  # noqa: F401
    ConfigError,
    clear_language,
    get_configured_language,
    load_config,
    save_config,
    set_language,
)
