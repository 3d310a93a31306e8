"""Markdown document scanner.

Turns a markdown document into a flat, forward-only stream of events.
Code blocks become ``FenceStart`` / ``Text`` / ``FenceEnd`` triples; every
other block-level token is reported as ``Other``. Parsing follows
CommonMark, so malformed markdown degrades the way CommonMark says it
does instead of raising.
"""

from collections.abc import Iterator

from markdown_it import MarkdownIt

from ..models import Event, FenceEnd, FenceStart, Other, Text

# Token types markdown-it uses for fenced and indented code blocks
CODE_TOKEN_TYPES = frozenset({"fence", "code_block"})


def _new_parser() -> MarkdownIt:
    return MarkdownIt("commonmark")


def scan(document: str) -> Iterator[Event]:
    """Yield structural events for document, in source order.

    Args:
        document: Markdown text

    Yields:
        FenceStart(info, line), Text(chunk) and FenceEnd for each code block,
        Other(kind) for everything else. Empty code blocks yield no Text.
    """
    for token in _new_parser().parse(document):
        if token.type not in CODE_TOKEN_TYPES:
            yield Other(kind=token.type)
            continue

        line = token.map[0] + 1 if token.map else None
        # Indented code blocks have no info string
        info = token.info if token.type == "fence" else ""
        yield FenceStart(info=info, line=line)
        if token.content:
            yield Text(chunk=token.content)
        yield FenceEnd()
