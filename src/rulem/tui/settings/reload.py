"""Command that reloads the configuration snapshot off the event loop."""

import logging

from rulem.tui.settings.events import ConfigReloaded
from rulem.tui.settings.model import SettingsServices

logger = logging.getLogger(__name__)


def reload_config(services: SettingsServices) -> ConfigReloaded:
    try:
        config = services.config_store.load()
    except (OSError, ValueError) as e:
        logger.error("Failed to load configuration: %s", e)
        return ConfigReloaded(error=e)
    return ConfigReloaded(config=config)
