from collections.abc import Sequence

from lsprotocol.types import Position
from pygls.workspace.position_codec import PositionCodec

from isaacls.context.types import CompletionContext
from isaacls.registry.registry import NamespaceRegistry

MEMBER_ACCESS_DELIMITER = "."


class NamespaceContextDetector:
    """
    Detects whether the cursor sits right after `<Namespace>.`.

    This is a plain suffix test on the line prefix: no tokenization, no
    bracket matching, no awareness of comments or string literals. Every
    registered namespace is checked the same way, so a new namespace only
    needs a registry entry.
    """

    def __init__(self, registry: NamespaceRegistry):
        """
        Initialize detector with the namespace registry.

        Args:
            registry: Registry whose names qualify a member access
        """
        self.registry = registry

    def detect(self, line_prefix: str) -> CompletionContext:
        """
        Get the completion context for the text before the cursor.

        Args:
            line_prefix: Text from the start of the line up to the cursor

        Returns:
            WITHIN_NAMESPACE if the text ends with a registered name
            followed by a single '.', GLOBAL otherwise
        """
        if not isinstance(line_prefix, str):
            return CompletionContext.global_scope()

        if not line_prefix.endswith(MEMBER_ACCESS_DELIMITER):
            return CompletionContext.global_scope()

        qualifier = line_prefix[: -len(MEMBER_ACCESS_DELIMITER)]

        # Longest name wins when one registered name ends another
        # (e.g. "Slot" and "ActiveSlot" both end "ActiveSlot.").
        match: str | None = None
        for name in self.registry.list_namespace_names():
            if qualifier.endswith(name) and (match is None or len(name) > len(match)):
                match = name

        if match is None:
            return CompletionContext.global_scope()

        return CompletionContext.within_namespace(match)


def line_prefix(
    lines: Sequence[str],
    position: Position,
    position_codec: PositionCodec | None = None,
) -> str:
    """
    Get the text from the start of the cursor line up to the cursor.

    Args:
        lines: Document lines
        position: Cursor position as sent by the client
        position_codec: Codec of the document. Client columns count
            encoding units (UTF-16 by default), not code points. Without
            a codec, position.character is taken as a code point index.

    Returns "" when the cursor line does not exist in the document.
    """
    if position.line < 0 or position.line >= len(lines):
        return ""

    line = lines[position.line].rstrip("\r\n")
    character = position.character

    if position_codec is not None:
        if character >= position_codec.client_num_units(line):
            return line
        character = position_codec.position_from_client_units(
            [line], Position(line=0, character=character)
        ).character

    return line[:character]
