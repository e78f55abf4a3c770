"""
Parser for the parser configuration (metadata) block.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hother.configtemplate.core.exceptions import ParserConfigError, TemplateSyntaxError
from hother.configtemplate.jsonc import decode, reduce
from hother.configtemplate.utils.logging import get_logger
from hother.configtemplate.utils.text import truncate

from .base import BlockParser

logger = get_logger(__name__)


class ProxySource(BaseModel):
    """A proxy subscription source."""

    model_config = ConfigDict(extra="allow")

    source: str = Field(..., description="Subscription URL or inline source")
    skip: list[dict[str, str]] = Field(default_factory=list, description="Filters for entries to leave out")


class OutboundSelection(BaseModel):
    """Which proxies an outbound selector offers."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    proxies: dict[str, Any] = Field(default_factory=dict, description="Proxy filter")
    add_outbounds: list[str] = Field(default_factory=list, alias="addOutbounds", description="Extra outbound tags")
    preferred_default: dict[str, Any] = Field(default_factory=dict, alias="preferredDefault", description="Default pick filter")


class OutboundConfig(BaseModel):
    """An outbound selector generated from subscriptions."""

    model_config = ConfigDict(extra="allow")

    tag: str = Field(..., description="Outbound tag")
    type: str = Field(..., description="Outbound type, e.g. selector or urltest")
    options: dict[str, Any] = Field(default_factory=dict, description="Type-specific options")
    outbounds: OutboundSelection = Field(default_factory=OutboundSelection, description="Member selection")
    comment: str = Field(default="", description="Free-form note")


class ParserConfigBody(BaseModel):
    """Body of the parser configuration."""

    model_config = ConfigDict(extra="allow")

    proxies: list[ProxySource] = Field(default_factory=list, description="Subscription sources")
    outbounds: list[OutboundConfig] = Field(default_factory=list, description="Generated outbound selectors")


class ParserConfig(BaseModel):
    """Parser configuration carried in a template's metadata block."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: int = Field(default=0, description="Configuration format version")
    parser_config: ParserConfigBody = Field(default_factory=ParserConfigBody, alias="ParserConfig", description="Configuration body")


class ParserConfigParser(BlockParser):
    """Parser for the metadata block."""

    marker: str = "ParcerConfig"
    description: str = "Subscription parser configuration document"

    def parse_content(self, content: str, block_index: int = 1) -> ParserConfig:
        """
        Decode and validate the metadata document.

        Comments and trailing commas are accepted, as in the template itself.

        Raises:
            ParserConfigError: If the document is not valid JSON or does not fit the model
        """
        try:
            data = decode(reduce(content), excerpt_length=self.excerpt_length)
            parsed = ParserConfig.model_validate(data)
        except (TemplateSyntaxError, ValidationError) as e:
            raise ParserConfigError(truncate(content, self.excerpt_length), message=f"Failed to parse @{self.marker} JSON: {e}") from e

        logger.info(
            f"Parsed @{self.marker} with {len(parsed.parser_config.proxies)} proxy sources "
            f"and {len(parsed.parser_config.outbounds)} outbounds"
        )
        return parsed
