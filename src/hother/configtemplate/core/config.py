"""
Configuration for template loading.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SECTION_ORDER: tuple[str, ...] = (
    "log",
    "dns",
    "inbounds",
    "outbounds",
    "route",
    "experimental",
    "rule_set",
    "rules",
)


class TemplateConfig(BaseModel):
    """Settings shared by every stage of the loading pipeline."""

    model_config = ConfigDict(frozen=True)

    metadata_marker: str = Field(default="ParcerConfig", min_length=1, description="Marker of the metadata block")
    rule_marker: str = Field(default="SelectableRule", min_length=1, description="Marker of selectable rule blocks")
    canonical_order: tuple[str, ...] = Field(default=DEFAULT_SECTION_ORDER, description="Sections serialized first, in this order")
    template_path: str = Field(default="bin/config_template.json", description="Template location relative to the executable directory")
    encoding: str = Field(default="utf-8", description="Template file encoding")
    excerpt_length: int = Field(default=200, ge=20, description="Maximum excerpt size in errors and debug logs")
    reject_duplicate_sections: bool = Field(default=True, description="Fail on repeated top-level section names instead of keeping the last")
