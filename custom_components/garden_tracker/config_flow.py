"""Configuration flow for the Garden Tracker integration.

This file manages the user interface for setting up the integration
(ConfigFlow), optionally importing a first garden layout, and for changing
the watering reset hour and default layout seeding afterwards (OptionsFlow).
"""

from __future__ import annotations

import logging
from typing import Any

import homeassistant.helpers.config_validation as cv
import voluptuous as vol
from homeassistant import config_entries
from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.core import callback

from .codec import SaveCodeError, parse
from .const import (
    CONF_INITIAL_LAYOUT,
    CONF_RESET_HOUR,
    CONF_SEED_DEFAULT_LAYOUTS,
    DEFAULT_NAME,
    DEFAULT_RESET_HOUR,
    DOMAIN,
)

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Optional("name", default=DEFAULT_NAME): cv.string,
        vol.Optional(CONF_INITIAL_LAYOUT): cv.string,
    }
)


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle the initial configuration flow for Garden Tracker."""

    VERSION = 1
    MINOR_VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the first step of the configuration flow.

        This step asks for a name for the integration instance and, optionally,
        a planner URL or save code to import as the first layout.

        Args:
            user_input: The user's input from the form, if any.

        Returns:
            A ConfigFlowResult creating the entry or showing the form again.
        """
        await self.async_set_unique_id(DOMAIN)
        self._abort_if_unique_id_configured()

        errors: dict[str, str] = {}
        _LOGGER.debug("async_step_user called with input: %s", user_input)

        if user_input is not None:
            name = user_input.get("name", DEFAULT_NAME)
            data = {"name": name}
            initial_layout = (user_input.get(CONF_INITIAL_LAYOUT) or "").strip()

            if initial_layout:
                try:
                    parse(initial_layout)
                except SaveCodeError as err:
                    _LOGGER.debug("Rejected initial layout: %s", err)
                    errors[CONF_INITIAL_LAYOUT] = "invalid_save_code"
                else:
                    data[CONF_INITIAL_LAYOUT] = initial_layout

            if not errors:
                _LOGGER.debug("Creating entry %s", name)
                return self.async_create_entry(title=name, data=data)

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlowHandler:
        """Get the options flow for this handler."""
        return OptionsFlowHandler(config_entry)


class OptionsFlowHandler(OptionsFlow):
    """Handles the options flow for Garden Tracker."""

    def __init__(self, config_entry: ConfigEntry) -> None:
        """Initialize the options flow handler.

        Args:
            config_entry: The configuration entry.
        """
        self._config_entry = config_entry
        self._current_options: dict[str, Any] = self._config_entry.options.copy()

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Show and store the integration options."""
        if user_input is not None:
            self._current_options.update(user_input)
            return self.async_create_entry(title="", data=self._current_options)

        schema = vol.Schema(
            {
                vol.Optional(
                    CONF_RESET_HOUR,
                    default=self._current_options.get(
                        CONF_RESET_HOUR, DEFAULT_RESET_HOUR
                    ),
                ): vol.All(vol.Coerce(int), vol.Range(min=0, max=23)),
                vol.Optional(
                    CONF_SEED_DEFAULT_LAYOUTS,
                    default=self._current_options.get(CONF_SEED_DEFAULT_LAYOUTS, True),
                ): cv.boolean,
            }
        )
        return self.async_show_form(step_id="init", data_schema=schema)
