"""Export of allow-listed configuration objects."""

from __future__ import annotations

import logging
from typing import Any

from siteapi.core.errors import AccessDeniedAppError, NotFoundAppError, ValidationAppError
from siteapi.services.config_store import CONFIG_EXPORT_CONFIG, ConfigStore

logger = logging.getLogger(__name__)


class ConfigExportService:
    """Expose selected configuration objects read-only.

    Only names listed in ``config_export.settings:export_configurations`` are
    exportable; the list is checked before the store so callers cannot probe
    which names exist.
    """

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def allowlist(self) -> list[str]:
        names = self._store.get_value(CONFIG_EXPORT_CONFIG, "export_configurations", [])
        return [n for n in names if isinstance(n, str)]

    def set_allowlist(self, names: list[str]) -> list[str]:
        """Replace the allow-list after checking that every name exists.

        Raises:
            ValidationAppError: If any name is not a stored configuration.
        """
        cleaned = sorted({n.strip() for n in names if n and n.strip()})
        unknown = [n for n in cleaned if not self._store.exists(n)]
        if unknown:
            raise ValidationAppError(
                code="unknown_configuration",
                message="Only existing configuration names can be exported",
                details={"unknown": unknown},
            )
        self._store.update(CONFIG_EXPORT_CONFIG, export_configurations=cleaned)
        logger.info("config_export.allowlist_saved", extra={"export_configurations": cleaned})
        return cleaned

    def export(self, config_name: str) -> dict[str, Any]:
        """Return the raw data of an allow-listed configuration object.

        Raises:
            AccessDeniedAppError: If the name is not allow-listed.
            NotFoundAppError: If the name is allow-listed but not stored.
        """
        if config_name not in self.allowlist():
            logger.warning("config_export.denied", extra={"config_name": config_name})
            raise AccessDeniedAppError(
                code="config_not_exportable",
                message="The requested configuration is not available for export.",
                details={"config_name": config_name},
            )

        data = self._store.get(config_name)
        if data is None:
            raise NotFoundAppError(
                code="config_not_found",
                message="The requested configuration does not exist.",
                details={"config_name": config_name},
            )

        logger.info("config_export.exported", extra={"config_name": config_name})
        return data
