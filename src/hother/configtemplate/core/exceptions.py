"""
Custom exceptions for template loading.
"""


class TemplateError(Exception):
    """
    Base exception for every template loading failure.

    Attributes:
        message: Human-readable description of the failure
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class MissingBlockError(TemplateError):
    """A mandatory annotation block was not found."""

    def __init__(self, marker: str, message: str | None = None):
        self.marker = marker
        super().__init__(message or f"@{marker} block not found in template")


class TemplateSyntaxError(TemplateError):
    """
    The document is not valid JSON once annotations and comments are removed.

    Attributes:
        excerpt: Bounded slice of the offending text
        position: Character offset of the error, when known
    """

    def __init__(self, excerpt: str, position: int | None = None, message: str | None = None):
        self.excerpt = excerpt
        self.position = position
        default_message = "Invalid JSON in template"
        if position is not None:
            default_message = f"Invalid JSON in template at offset {position}"
        super().__init__(message or f"{default_message}: {excerpt}")


class DuplicateSectionError(TemplateSyntaxError):
    """A top-level section name occurs more than once."""

    def __init__(self, section: str, message: str | None = None):
        self.section = section
        super().__init__(
            excerpt=section,
            message=message or f"Section '{section}' is defined more than once in template",
        )


class UnterminatedBlockError(TemplateSyntaxError):
    """An annotation block opener has no closing delimiter."""

    def __init__(self, marker: str, position: int, excerpt: str = "", message: str | None = None):
        self.marker = marker
        super().__init__(
            excerpt=excerpt,
            position=position,
            message=message or f"@{marker} block opened at offset {position} is never closed",
        )


class RuleBlockError(TemplateError):
    """
    Base exception for a malformed selectable rule block.

    Attributes:
        block_index: 1-based position of the block in the document
    """

    def __init__(self, block_index: int, message: str):
        self.block_index = block_index
        super().__init__(message)


class EmptyBlockError(RuleBlockError):
    """A selectable rule block holds no JSON content."""

    def __init__(self, block_index: int, message: str | None = None):
        super().__init__(block_index, message or f"Selectable rule block {block_index} has no JSON content")


class RuleBlockSyntaxError(RuleBlockError):
    """A selectable rule block does not decode to a list of JSON objects."""

    def __init__(self, block_index: int, excerpt: str, message: str | None = None):
        self.excerpt = excerpt
        super().__init__(
            block_index,
            message or f"Selectable rule block {block_index} contains invalid JSON: {excerpt}",
        )


class ParserConfigError(TemplateError):
    """The metadata block does not decode into a parser configuration."""

    def __init__(self, excerpt: str, message: str | None = None):
        self.excerpt = excerpt
        super().__init__(message or f"Failed to parse parser configuration: {excerpt}")
