"""Prompt templates for each GenerationKind.

Templates contain literal JSON examples, so the input is substituted with
a plain replace of ``{input}`` rather than str.format().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from creator_studio.backend.models import (
    DescriptionGenerationResponse,
    ScriptGenerationResponse,
    ShortsGenerationResponse,
    TitleGenerationResponse,
)
from creator_studio.backend.protocols import GenerationKind

ModelRole = Literal["text", "pro", "search"]

INPUT_PLACEHOLDER = "{input}"


@dataclass(frozen=True)
class GenerationSpec:
    """How to run one GenerationKind.

    Attributes:
        template: Prompt text containing ``{input}``.
        schema: Expected result type, or None for plain text.
        what: Noun used in error messages ("titles", "hooks", ...).
        model_role: Which configured model to use.
        json_output: Ask the service for a JSON response body.
        use_search: Enable the search tool (cannot be combined with json_output).
    """

    template: str
    schema: Any
    what: str
    model_role: ModelRole = "text"
    json_output: bool = True
    use_search: bool = False

    def render(self, value: str) -> str:
        return self.template.replace(INPUT_PLACEHOLDER, value)


TITLES_PROMPT = """You are a YouTube Title Strategist. Create accurate, high-CTR, SEO-friendly titles without being misleading.

Inputs:
- topic: {input}
- primary_keywords: N/A
- audience: general
- tone_voice: engaging
- constraints: N/A
- language: en

Rules:
- Generate 12-15 distinct title options spanning formats: How-to, List/Numbered, Vs/Comparison, Myth-bust, Case study/Results, Challenge, Tutorial, Question, News/Update.
- Keep most titles <= 60-65 characters; provide 2 slightly longer variants (<= 75) if useful.
- Place a primary keyword early when natural. No ALL CAPS. Avoid clickbait, false urgency, or unverifiable claims.
- Optimize for clarity + curiosity + specificity. If the topic is time-sensitive/news, add recency cues.

Scoring rubric (0-10 each): clarity, curiosity, specificity, keyword placement, length fit. Compute average as ctr_score.

Output as compact JSON only:
{
  "titles": [
    {
      "text": "...",
      "style_tags": ["how_to","curiosity_gap"],
      "keyword_included": true,
      "char_count": 0,
      "scores": { "clarity": 0, "curiosity": 0, "specificity": 0, "keyword": 0, "length_fit": 0, "ctr_score": 0.0 },
      "rationale": "1 short sentence on why it works"
    }
  ],
  "top_picks": [ { "text": "...", "reason": "..." } ],
  "best_title": { "text": "...", "reason": "why this is best for the audience/keyword intent" },
  "notes": "quick guidance for thumbnail text (<= 4 words) that pairs with the best title"
}"""

DESCRIPTION_PROMPT = """You are a YouTube Description Optimizer. Write a concise, SEO-smart description that ranks and converts.

Inputs:
- title: {input}
- topic_or_summary: {input}
- cta: subscribe for more tips
- brand_voice: friendly expert
- include_chapters: false
- video_duration_minutes: 10
- language: en

Rules:
- First 2 lines must hook and include a primary keyword; keep them punchy.
- Keep total length 150-400 words.
- Don't fabricate facts; if details are missing, be generic but useful.
- Include 3-5 relevant hashtags (not spammy) and 10-20 SEO keywords at the end.

Output as JSON only:
{
  "description": "Full multi-paragraph description text.",
  "chapters": [ { "title": "Intro & Promise", "timestamp": "0:00" } ],
  "hashtags": ["#Example","#Topic"],
  "keywords": ["keyword1","keyword2"],
  "pinned_comment": "Optional single-sentence CTA or summary for comments."
}"""

SCRIPT_PROMPT = """You are a YouTube Script Architect. Build a tight, shoot-ready script with pacing, beats, and visual notes.

Inputs:
- topic: {input}
- audience: general audience
- goal: educate
- target_duration_minutes: 8
- brand_voice: energetic
- cta: subscribe
- language: en

Structure & rules:
- Include: Hook (5-10s), Setup/Promise, Sections with clear beats, Mini-CTA mid-video, Strong final CTA, and Outro.
- Allocate timestamps across sections to match target duration. Keep intros short; deliver value fast.
- Use plain, speakable sentences. Mark on-screen text separately. Propose B-roll, cutaways, or graphics per beat.
- Provide 3 alternate hooks and 3 alternate CTAs at the end.
- Do not invent unverifiable claims. If a fact needs citation, mark "cite needed".

Output JSON only:
{
  "metadata": { "estimated_duration": "00:07:30", "tone": "friendly expert", "language": "en" },
  "sections": [
    {
      "id": "hook",
      "time_range": "00:00-00:10",
      "narration": "Opening line...",
      "on_screen_text": "BIG IDEA IN 3-5 WORDS",
      "visuals_broll": ["Quick cut of ..."],
      "graphics": ["Lower-third title"],
      "sfx_music": ["whoosh"],
      "beats": ["Problem", "Why it matters"]
    }
  ],
  "midroll_cta": { "time_range": "MM:SS-MM:SS", "narration": "...", "on_screen_text": "...", "visuals_broll": [] },
  "final_cta": { "narration": "...", "on_screen_text": "...", "visuals_broll": [] },
  "alternatives": { "hooks": [], "ctas": [], "title_ideas": [] }
}"""

_JSON_ARRAY_SUFFIX = (
    " Return the result as a JSON array of strings inside a ```json block. "
    "Do not include any other text, preamble, or explanation."
)

HOOKS_PROMPT = (
    "Generate 5 short, punchy, and engaging opening hooks (less than 15 words each) "
    'for a YouTube video about "{input}". The hooks should grab the viewer\'s attention '
    "immediately." + _JSON_ARRAY_SUFFIX
)

TAGS_PROMPT = (
    "Generate a list of 10-15 relevant and SEO-optimized YouTube tags for a video about "
    '"{input}". Include a mix of broad and specific tags.' + _JSON_ARRAY_SUFFIX
)

CONTENT_IDEAS_PROMPT = (
    "Brainstorm 5 creative and engaging YouTube video ideas based on the topic: "
    '"{input}". For each idea, provide a short, catchy title.' + _JSON_ARRAY_SUFFIX
)

CHANNEL_NAMES_PROMPT = (
    "Brainstorm 10 unique, catchy, and available-sounding YouTube channel names related "
    'to the topic: "{input}".' + _JSON_ARRAY_SUFFIX
)

SHORTS_IDEAS_PROMPT = """Brainstorm 3-5 distinct, viral YouTube Shorts ideas based on the topic: "{input}".
For each idea, provide a catchy title, 2-3 short hooks to grab attention, and a brief 1-2 sentence description of the short.

Return the result as a JSON object with a single key "ideas" which is an array of objects.
Each object should have "title", "hooks" (an array of strings), and "description" keys.
Do not include any other text, preamble, or explanation."""

TRENDING_TOPICS_PROMPT = (
    "Find 5 current trending topics or news headlines that would make for engaging "
    "YouTube videos. Use Google Search for up-to-date information." + _JSON_ARRAY_SUFFIX
)

CHAPTERS_PROMPT = """Analyze the following video transcript and create a list of YouTube video chapters. For each chapter, provide a "MM:SS" timestamp and a concise, descriptive title. The first chapter must start at "00:00". Return ONLY the list of chapters, without any introductory phrases.

Transcript:
{input}"""

VIRAL_POST_PROMPT = """You are an expert X (Twitter) copywriter known for creating viral posts.
Write a single, highly engaging post based on the following topic: "{input}".

Rules:
1. Strong Hook: Start with a question, a bold statement, or a surprising fact.
2. Provide Value: Offer a key insight, a useful tip, a quick story, or a unique perspective.
3. Readability: Use simple language, short sentences, and line breaks.
4. Call to Engagement: End with a question that encourages replies.
5. Hashtags: Include 1-3 relevant and popular hashtags.

Return ONLY the text of the post. Do not include any preamble, explanation, or markdown formatting."""

THREAD_PROMPT = (
    'Generate a 5-tweet Twitter thread about "{input}". Make it engaging, informative, '
    "and formatted for X. Each tweet should be concise (under 280 chars)."
    + _JSON_ARRAY_SUFFIX
)

HASHTAGS_PROMPT = (
    'Generate 10 popular and relevant hashtags for an X (Twitter) post about "{input}".'
    + _JSON_ARRAY_SUFFIX
)

CHOOSE_BEST_PROMPT = """From the following list, select the single best option for the purpose of "{purpose}". Return ONLY the selected option as a string, with no explanation or preamble.

Options:
{options}"""


GENERATION_SPECS: dict[GenerationKind, GenerationSpec] = {
    GenerationKind.TITLES: GenerationSpec(TITLES_PROMPT, TitleGenerationResponse, "titles"),
    GenerationKind.HOOKS: GenerationSpec(HOOKS_PROMPT, list[str], "hooks"),
    GenerationKind.SCRIPT: GenerationSpec(
        SCRIPT_PROMPT, ScriptGenerationResponse, "script", model_role="pro"
    ),
    GenerationKind.DESCRIPTION: GenerationSpec(
        DESCRIPTION_PROMPT, DescriptionGenerationResponse, "description"
    ),
    GenerationKind.TAGS: GenerationSpec(TAGS_PROMPT, list[str], "tags"),
    GenerationKind.VIRAL_POST: GenerationSpec(
        VIRAL_POST_PROMPT, None, "post", json_output=False
    ),
    GenerationKind.THREAD: GenerationSpec(THREAD_PROMPT, list[str], "thread"),
    GenerationKind.HASHTAGS: GenerationSpec(HASHTAGS_PROMPT, list[str], "hashtags"),
    GenerationKind.CONTENT_IDEAS: GenerationSpec(CONTENT_IDEAS_PROMPT, list[str], "ideas"),
    GenerationKind.CHANNEL_NAMES: GenerationSpec(
        CHANNEL_NAMES_PROMPT, list[str], "channel names"
    ),
    GenerationKind.SHORTS_IDEAS: GenerationSpec(
        SHORTS_IDEAS_PROMPT, ShortsGenerationResponse, "Shorts ideas"
    ),
    GenerationKind.TRENDING_TOPICS: GenerationSpec(
        TRENDING_TOPICS_PROMPT,
        list[str],
        "trending topics",
        model_role="search",
        json_output=False,
        use_search=True,
    ),
    GenerationKind.CHAPTERS: GenerationSpec(
        CHAPTERS_PROMPT, None, "chapters", model_role="pro", json_output=False
    ),
}


def render_choose_best(candidates: list[str], purpose: str) -> str:
    """Build the chooser prompt for ``candidates``."""
    options = "\n".join(f"- {c}" for c in candidates)
    return CHOOSE_BEST_PROMPT.replace("{purpose}", purpose).replace("{options}", options)
