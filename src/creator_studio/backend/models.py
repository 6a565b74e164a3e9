"""Pydantic models for structured generation responses.

Required fields mirror what a usable response must contain; everything
else defaults so that models omitting optional detail still validate.
Unknown keys are kept (extra="allow").
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TitleScore(BaseModel):
    """Rubric scores for one title option."""

    model_config = ConfigDict(extra="allow")

    clarity: float = 0
    curiosity: float = 0
    specificity: float = 0
    keyword: float = 0
    length_fit: float = 0
    ctr_score: float = 0


class TitleOption(BaseModel):
    """One generated title."""

    model_config = ConfigDict(extra="allow")

    text: str
    style_tags: list[str] = Field(default_factory=list)
    keyword_included: bool = False
    char_count: int = 0
    scores: TitleScore = Field(default_factory=TitleScore)
    rationale: str = ""


class TopPick(BaseModel):
    """A title nominated by the model, with its reasoning."""

    model_config = ConfigDict(extra="allow")

    text: str
    reason: str = ""


class TitleGenerationResponse(BaseModel):
    """Title strategist output."""

    model_config = ConfigDict(extra="allow")

    titles: list[TitleOption] = Field(min_length=1)
    top_picks: list[TopPick] = Field(default_factory=list)
    best_title: TopPick
    notes: str = ""

    @property
    def texts(self) -> list[str]:
        """Title texts in generation order, without duplicates."""
        return list(dict.fromkeys(t.text.strip() for t in self.titles if t.text.strip()))


class Chapter(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str
    timestamp: str


class DescriptionGenerationResponse(BaseModel):
    """Description optimizer output."""

    model_config = ConfigDict(extra="allow")

    description: str = Field(min_length=1)
    chapters: list[Chapter] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    pinned_comment: str = ""


class ScriptMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    estimated_duration: str = ""
    tone: str = ""
    language: str = "en"


class ScriptSection(BaseModel):
    """One timed section of a script."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    time_range: str = ""
    narration: str = ""
    on_screen_text: str = ""
    visuals_broll: list[str] = Field(default_factory=list)
    graphics: list[str] = Field(default_factory=list)
    sfx_music: list[str] = Field(default_factory=list)
    beats: list[str] | None = None


class ScriptCTA(BaseModel):
    model_config = ConfigDict(extra="allow")

    time_range: str | None = None
    narration: str = ""
    on_screen_text: str = ""
    visuals_broll: list[str] = Field(default_factory=list)


class ScriptAlternatives(BaseModel):
    model_config = ConfigDict(extra="allow")

    hooks: list[str] = Field(default_factory=list)
    ctas: list[str] = Field(default_factory=list)
    title_ideas: list[str] = Field(default_factory=list)


class ScriptGenerationResponse(BaseModel):
    """Script architect output."""

    model_config = ConfigDict(extra="allow")

    metadata: ScriptMetadata
    sections: list[ScriptSection] = Field(default_factory=list)
    midroll_cta: ScriptCTA | None = None
    final_cta: ScriptCTA | None = None
    alternatives: ScriptAlternatives = Field(default_factory=ScriptAlternatives)

    def to_text(self) -> str:
        """Render the script as readable plain text."""
        lines: list[str] = []
        if self.metadata.estimated_duration:
            lines.append(f"Estimated duration: {self.metadata.estimated_duration}")
        for section in self.sections:
            header = section.id or "section"
            if section.time_range:
                header = f"{header} ({section.time_range})"
            lines.append("")
            lines.append(f"[{header}]")
            if section.narration:
                lines.append(section.narration)
            if section.on_screen_text:
                lines.append(f"On screen: {section.on_screen_text}")
        for label, cta in (("Mid-roll CTA", self.midroll_cta), ("Final CTA", self.final_cta)):
            if cta is not None and cta.narration:
                lines.append("")
                lines.append(f"[{label}]")
                lines.append(cta.narration)
        return "\n".join(lines).strip()


class ShortsIdea(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str
    hooks: list[str] = Field(default_factory=list)
    description: str = ""


class ShortsGenerationResponse(BaseModel):
    """Shorts ideas output."""

    model_config = ConfigDict(extra="allow")

    ideas: list[ShortsIdea]


def dump(value: Any) -> Any:
    """Convert a generation result into JSON-serializable data."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value
