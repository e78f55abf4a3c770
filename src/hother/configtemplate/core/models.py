"""
Core models for template loading.
"""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AnnotationBlock(BaseModel):
    """A comment block carrying a named marker, cut out of a template."""

    marker: str = Field(..., description="Marker name without the leading '@'")
    content: str = Field(..., description="Trimmed text between the marker and the closing delimiter")
    index: int = Field(..., ge=1, description="1-based occurrence index")
    start: int = Field(..., ge=0, description="Offset of the block opener in the source text")
    end: int = Field(..., ge=0, description="Offset just past the closing delimiter")

    def __str__(self) -> str:
        """String representation."""
        return f"Block[@{self.marker}#{self.index}]"

    def log_context(self) -> dict[str, Any]:
        """Get context dict for structured logging."""
        return {
            "marker": self.marker,
            "block_index": self.index,
            "content_length": len(self.content),
        }


class RuleVariant(BaseModel):
    """One selectable alternative offered to the operator."""

    label: str = Field(..., min_length=1, description="Display label")
    description: str = Field(default="", description="Group description, if the block declared one")
    raw: dict[str, Any] = Field(default_factory=dict, description="Verbatim copy of the source record")
    has_outbound: bool = Field(default=False, description="Whether the record carries an 'outbound' field")
    default_outbound: str | None = Field(default=None, description="The record's outbound when it is a string")

    @model_validator(mode="after")
    def _check_outbound(self) -> "RuleVariant":
        if self.default_outbound is not None and not self.has_outbound:
            raise ValueError("default_outbound requires has_outbound")
        return self


class SelectableRuleGroup(BaseModel):
    """Directives and records of a single selectable rule block."""

    index: int = Field(..., ge=1, description="1-based block index")
    label: str | None = Field(default=None, description="@label directive value")
    description: str | None = Field(default=None, description="@description directive value")
    records: list[dict[str, Any]] = Field(default_factory=list, description="Decoded records, in source order")


class RuleNumbering(BaseModel):
    """
    Running position of variants across every block of one document.

    Synthesized labels use this position, so a single instance must be shared
    by all blocks of a document and never reused for another document.
    """

    model_config = ConfigDict(validate_assignment=True)

    assigned: int = Field(default=0, ge=0, description="Variants numbered so far")

    def advance(self) -> int:
        """Claim the next 1-based position."""
        self.assigned += 1
        return self.assigned


class TemplateData(BaseModel):
    """Everything extracted from one template."""

    parser_config: str = Field(default="", description="Raw metadata block text, empty when absent")
    sections: dict[str, Any] = Field(default_factory=dict, description="Top-level sections in source order")
    section_order: list[str] = Field(default_factory=list, description="Serialization order of sections")
    selectable_rules: list[RuleVariant] = Field(default_factory=list, description="Variants from every rule block")
    default_final: str = Field(default="", description="route.final hint, empty when absent")

    @model_validator(mode="after")
    def _check_section_order(self) -> "TemplateData":
        if len(self.section_order) != len(set(self.section_order)):
            raise ValueError("section_order contains duplicates")
        if set(self.section_order) != set(self.sections):
            raise ValueError("section_order must list exactly the section names")
        return self

    def ordered_sections(self) -> Iterator[tuple[str, Any]]:
        """Yield (name, value) pairs in serialization order."""
        for name in self.section_order:
            yield name, self.sections[name]

    def log_context(self) -> dict[str, Any]:
        """Get context dict for structured logging."""
        return {
            "sections": len(self.sections),
            "selectable_rules": len(self.selectable_rules),
            "has_parser_config": bool(self.parser_config),
            "default_final": self.default_final,
        }
