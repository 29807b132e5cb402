"""Shared models for remder."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

# ── Enums ──


class DiagramDialect(StrEnum):
    PLANTUML = "plantuml"
    UML = "uml"
    SALT = "salt"
    DITAA = "ditaa"
    DOT = "dot"
    JCCKIT = "jcckit"

    @property
    def markers(self) -> tuple[str, str]:
        return _MARKERS.get(self, (f"start{self.value}", f"end{self.value}"))

    @property
    def start_marker(self) -> str:
        return self.markers[0]

    @property
    def end_marker(self) -> str:
        return self.markers[1]

    def wrap(self, source: str) -> str:
        """Wrap diagram source in this dialect's @start/@end directives."""
        return f"@{self.start_marker}\n{source}\n@{self.end_marker}"

    @classmethod
    def from_info(cls, info: str | None) -> DiagramDialect | None:
        """Return the dialect named by a fence info-string, if any."""
        if not info:
            return None
        words = info.split()
        if not words:
            return None
        try:
            return cls(words[0])
        except ValueError:
            return None


# Dialects whose markers don't follow start<name>/end<name>
_MARKERS: dict[DiagramDialect, tuple[str, str]] = {
    DiagramDialect.PLANTUML: ("startuml", "enduml"),
}


# ── Diagram models ──


class DiagramBlock(BaseModel):
    dialect: DiagramDialect
    source: str

    model_config = ConfigDict(frozen=True)

    @property
    def cache_key(self) -> int:
        from remder.cache.keys import content_hash

        # Keyed on source only; the dialect is not part of the key.
        return content_hash(self.source)

    def wrapped_source(self) -> str:
        return self.dialect.wrap(self.source)


class CacheEntry(BaseModel):
    """A rendered diagram: image bytes plus the engine's description."""

    image: bytes
    description: str = ""

    @property
    def size_bytes(self) -> int:
        return len(self.image) + len(self.description.encode("utf-8"))


# ── Render outcomes ──


class RenderSuccess(BaseModel):
    data_uri: str
    description: str = ""


class RenderFallback(BaseModel):
    reason: Exception

    model_config = ConfigDict(arbitrary_types_allowed=True)


RenderOutcome = RenderSuccess | RenderFallback
