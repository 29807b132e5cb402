"""markdown-it-py plugin that renders diagram fences as inline PNG images."""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping, Sequence

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml, unescapeAll
from markdown_it.token import Token
from markdown_it.utils import OptionsDict

from remder.concurrency.gate import Completed, RenderGate
from remder.diagrams.renderer import DiagramRenderer
from remder.types import (
    DiagramBlock,
    DiagramDialect,
    RenderFallback,
    RenderOutcome,
    RenderSuccess,
)
from remder.utils.image import png_data_uri

logger = logging.getLogger(__name__)

RenderRule = Callable[..., str]


class DiagramFenceRule:
    """Replacement for markdown-it's ``fence`` rule.

    Diagram fences go through the gate; everything else, and any diagram
    that fails or times out, goes to the original fence rule untouched.
    """

    def __init__(
        self,
        default_fence: RenderRule,
        renderer: DiagramRenderer,
        gate: RenderGate,
    ) -> None:
        self._default_fence = default_fence
        self._renderer = renderer
        self._gate = gate

    def outcome(self, block: DiagramBlock) -> RenderOutcome:
        """Render one block within the gate's budget."""
        result = self._gate.guard(lambda: self._renderer.render(block))
        if isinstance(result, Completed):
            entry = result.value
            return RenderSuccess(data_uri=png_data_uri(entry.image), description=entry.description)
        return RenderFallback(reason=result.error)

    def __call__(
        self,
        tokens: Sequence[Token],
        idx: int,
        options: OptionsDict,
        env: MutableMapping,
    ) -> str:
        token = tokens[idx]
        # Same info-string handling as markdown-it's own fence rule
        info = unescapeAll(token.info).strip() if token.info else ""
        dialect = DiagramDialect.from_info(info)
        if dialect is None:
            return self._default_fence(tokens, idx, options, env)

        block = DiagramBlock(dialect=dialect, source=token.content)
        logger.debug("Rendering %s fence at line %s", dialect.value, _line_of(token))
        outcome = self.outcome(block)

        if isinstance(outcome, RenderSuccess):
            return (
                f'<img src="{outcome.data_uri}" '
                f'title="{escapeHtml(outcome.description)}" />\n'
            )

        logger.warning(
            "Failed rendering %s diagram %s: %s",
            dialect.value,
            block.cache_key,
            outcome.reason,
        )
        return self._default_fence(tokens, idx, options, env)


def diagram_plugin(md: MarkdownIt, renderer: DiagramRenderer, gate: RenderGate) -> None:
    """Install diagram rendering on a MarkdownIt instance (``md.use(...)``)."""
    default_fence = md.renderer.rules["fence"]
    md.renderer.rules["fence"] = DiagramFenceRule(default_fence, renderer, gate)


def _line_of(token: Token) -> int | None:
    return token.map[0] + 1 if token.map else None
