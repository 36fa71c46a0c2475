"""Manifest header generation and extender capability negotiation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from osgijar.project.model import ExtenderSetting, PackageInfo

TOOL_NAME = "osgijar"
EXTENDER_ID = "liferay.frontend.js.portlet"
EXTENDER_ANY_VERSION = "any"

ManifestHeaders = list[tuple[str, str]]


def resolve_minimum_extender_version(
    setting: ExtenderSetting,
    *,
    system_present: bool,
    portlet_present: bool,
) -> str | None:
    """Get the minimum extender version needed for this bundle's capabilities.

    Args:
        setting: Extender requirement setting (False, True, "any" or a version)
        system_present: Whether a system configuration descriptor is present
        portlet_present: Whether a portlet-instance descriptor is present

    Returns:
        A ``1.<minor>.0`` version, the explicit version, or None if no
        version constraint applies
    """
    if setting is False:
        return None

    if isinstance(setting, str):
        if setting == EXTENDER_ANY_VERSION:
            return None
        return setting

    minor = 0
    if system_present:
        minor = max(minor, 1)
    if portlet_present:
        minor = max(minor, 1)

    if minor == 0:
        return None

    return f"1.{minor}.0"


def extender_filter(minimum_version: str | None) -> str:
    """Render the LDAP filter matching the portlet extender."""
    if minimum_version:
        return f"(&(osgi.extender={EXTENDER_ID})(version>={minimum_version}))"
    return f"(osgi.extender={EXTENDER_ID})"


def build_manifest_headers(
    package: PackageInfo,
    *,
    tool_version: str,
    web_context_path: str,
    localization_bundle_name: str | None = None,
    extender_setting: ExtenderSetting = True,
    minimum_extender_version: str | None = None,
    custom_headers: Mapping[str, str] | None = None,
) -> ManifestHeaders:
    """Compute the ordered manifest header sequence.

    The requirement on the extender is emitted when a minimum version was
    resolved, or when the setting explicitly asks for any extender version.
    """
    headers: ManifestHeaders = [
        ("Manifest-Version", "1.0"),
        ("Bundle-ManifestVersion", "2"),
        ("Tool", f"{TOOL_NAME}-{tool_version}"),
        ("Bundle-SymbolicName", package.name),
        ("Bundle-Version", package.version),
    ]

    if package.description:
        headers.append(("Bundle-Name", package.description))

    headers.append(("Web-ContextPath", web_context_path))
    headers.append(
        (
            "Provide-Capability",
            f"osgi.webresource;osgi.webresource={package.name};"
            f'version:Version="{package.version}"',
        )
    )

    if localization_bundle_name:
        headers.append(
            (
                "Provide-Capability",
                "liferay.resource.bundle;"
                f'resource.bundle.base.name="content.{localization_bundle_name}"',
            )
        )

    if minimum_extender_version is not None or extender_setting == EXTENDER_ANY_VERSION:
        headers.append(
            (
                "Require-Capability",
                f'osgi.extender;filter:="{extender_filter(minimum_extender_version)}"',
            )
        )

    for key, value in (custom_headers or {}).items():
        headers.append((key, value))

    return headers


def format_manifest(headers: Iterable[tuple[str, str]]) -> str:
    """Serialize headers as ``Key: value`` lines."""
    return "".join(f"{key}: {value}\n" for key, value in headers)
