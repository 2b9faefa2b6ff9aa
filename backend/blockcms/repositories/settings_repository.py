import logging

from pydantic import ValidationError as SchemaError

from blockcms.domain.errors import ValidationError
from blockcms.domain.navigation import DEFAULT_SITE_NAME, GLOBAL_SETTINGS_KEY, GlobalSettings
from blockcms.models.system_config import SystemConfig
from blockcms.utils.transaction import transactional
from .base import BaseRepository

logger = logging.getLogger(__name__)


class SettingsRepository(BaseRepository):
    """Key/value site configuration. The global settings row is created on first write."""

    model = SystemConfig
    not_found_message = "Setting not found"

    def get(self, key):
        return self._query().filter(SystemConfig.key == key).first()

    def get_global_settings(self) -> GlobalSettings:
        row = self.get(GLOBAL_SETTINGS_KEY)
        if row is None or not isinstance(row.value, dict):
            return GlobalSettings(site_name=DEFAULT_SITE_NAME)

        try:
            return GlobalSettings.model_validate(row.value)
        except SchemaError:
            logger.warning("Stored global settings are malformed; using defaults")
            return GlobalSettings(site_name=DEFAULT_SITE_NAME)

    def update_global_settings(self, changes) -> GlobalSettings:
        """Merge ``changes`` into the stored settings; unspecified fields are kept."""
        current = self.get_global_settings().model_dump()
        current.update(changes)

        try:
            settings = GlobalSettings.model_validate(current)
        except SchemaError as exc:
            raise ValidationError("Invalid settings payload") from exc

        row = self.get(GLOBAL_SETTINGS_KEY)
        with transactional(self.session):
            if row is None:
                row = SystemConfig(key=GLOBAL_SETTINGS_KEY, tenant_id=self.tenant_id)
                row.ensure_id()
                self.session.add(row)
            row.value = settings.model_dump()

        return settings
