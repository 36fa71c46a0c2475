"""DDM form transformer for portlet instance preferences."""

from __future__ import annotations

import logging
from typing import Any

from osgijar.app.ports import PreferencesTransformerPort
from osgijar.jar.configuration import ConfigurationSection, FieldDescription
from osgijar.jar.localization import DEFAULT_LOCALE, available_locales, load_properties
from osgijar.project.model import ProjectDescriptor

logger = logging.getLogger(__name__)

# configuration type -> (DDM field type, DDM data type)
_DDM_TYPES: dict[str, tuple[str, str]] = {
    "boolean": ("checkbox", "boolean"),
    "float": ("numeric", "double"),
    "number": ("numeric", "integer"),
    "password": ("password", "string"),
    "string": ("text", "string"),
}


class DDMPreferencesTransformer(PreferencesTransformerPort):
    """Render portlet-instance fields as a DDM form definition.

    Labels, tips and option labels are localized maps keyed by locale id.
    When the project ships language bundles, each text is looked up as a key
    in every locale's bundle, falling back to the default bundle and then to
    the text itself.
    """

    def transform(
        self,
        project: ProjectDescriptor,
        section: ConfigurationSection,
    ) -> dict[str, Any]:
        bundles = {
            locale: load_properties(path)
            for locale, path in available_locales(project.l10n).items()
        }
        if DEFAULT_LOCALE not in bundles:
            bundles = {DEFAULT_LOCALE: {}, **bundles}

        localizer = _Localizer(bundles)

        fields = [
            self._transform_field(field_id, desc, localizer)
            for field_id, desc in section.fields.items()
        ]

        logger.debug(
            "Transformed %d portlet preference field(s) for %d locale(s)",
            len(fields),
            len(bundles),
        )

        return {
            "availableLanguageIds": list(bundles),
            "defaultLanguageId": DEFAULT_LOCALE,
            "fields": fields,
        }

    def _transform_field(
        self,
        field_id: str,
        desc: FieldDescription,
        localizer: _Localizer,
    ) -> dict[str, Any]:
        ddm_type, data_type = _DDM_TYPES.get(desc.type or "string", _DDM_TYPES["string"])
        if desc.options and ddm_type == "text":
            ddm_type = "select"

        field: dict[str, Any] = {
            "dataType": data_type,
            "label": localizer.localize(desc.name or field_id),
            "name": field_id,
            "type": ddm_type,
        }

        if desc.description:
            field["tip"] = localizer.localize(desc.description)
        if desc.default is not None:
            field["predefinedValue"] = localizer.constant(desc.default)
        if desc.required is not None:
            field["required"] = desc.required
        if desc.repeatable is not None:
            field["repeatable"] = desc.repeatable
        if desc.options:
            field["options"] = [
                {"label": localizer.localize(label), "value": value}
                for value, label in desc.options.items()
            ]

        return field


class _Localizer:
    def __init__(self, bundles: dict[str, dict[str, str]]) -> None:
        self._bundles = bundles
        self._defaults = bundles.get(DEFAULT_LOCALE, {})

    def localize(self, text: str) -> dict[str, str]:
        return {
            locale: bundle.get(text, self._defaults.get(text, text))
            for locale, bundle in self._bundles.items()
        }

    def constant(self, value: Any) -> dict[str, Any]:
        return {locale: value for locale in self._bundles}
