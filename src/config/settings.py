"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use UIDLRESOLVE_ prefix (e.g., UIDLRESOLVE_ASSETS_IDENTIFIER=/assets).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use UIDLRESOLVE_ prefix.

    Examples:
        UIDLRESOLVE_ASSETS_IDENTIFIER=/static_assets
        UIDLRESOLVE_LOCAL_DEPENDENCIES_PREFIX=../components/
        UIDLRESOLVE_STYLE_PROPERTIES_WITH_URL='["background", "backgroundImage", "mask"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="UIDLRESOLVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Asset rewriting
    assets_identifier: str = Field(
        default="/playground_assets",
        description="Marker identifying a local asset reference inside style/attribute strings",
    )

    style_properties_with_url: Tuple[str, ...] = Field(
        default=("background", "backgroundImage"),
        description="Style properties whose values are checked for asset references",
    )

    attributes_with_url: Tuple[str, ...] = Field(
        default=("url", "srcset"),
        description="Node attributes whose values are prefixed with the assets prefix",
    )

    default_assets_prefix: Optional[str] = Field(
        default=None,
        description="Assets prefix used by the CLI when --assetsPrefix is not given",
    )

    # Mapping tokens
    children_token: str = Field(
        default="$children",
        description="Token inside mapping children templates replaced by the node's own children",
    )

    attrs_reference_prefix: str = Field(
        default="$attrs.",
        description="Prefix of mapping values that reference an attribute of the UIDL node",
    )

    state_type: str = Field(
        default="state",
        description="Node type holding mutually exclusive state branches",
    )

    # Dependency inference
    local_dependencies_prefix: str = Field(
        default="./",
        description="Path prefix for local dependencies declared without a path",
    )

    # Output configuration
    output_indent: int = Field(
        default=2,
        description="JSON indentation of the resolved UIDL written by the CLI",
    )

    def attrsReference_extract(self, value: object) -> Optional[str]:
        """
        Extract the referenced attribute name from an attribute reference.

        Args:
            value: Mapping value to parse

        Returns:
            Referenced attribute name if value is a reference, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.attrsReference_extract('$attrs.url')
            'url'
            >>> settings.attrsReference_extract('_blank') is None
            True
        """
        if not isinstance(value, str):
            return None
        if not value.startswith(self.attrs_reference_prefix):
            return None
        return value[len(self.attrs_reference_prefix):]


# Singleton instance - import this in your code
appsettings = AppSettings()
