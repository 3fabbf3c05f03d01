"""
ANALYSIS PARSER - Turn free-text LLM critique into structured feedback

Deep analysis replies are markdown-ish prose. This parser walks them line by
line, tracks which section it is in (strengths, improvements, rewritten prompt,
example prompts) and pulls out list items with lenient patterns.

It is a best-effort heuristic: oddly formatted replies may be misclassified,
but parsing never raises. The raw text is always returned in `analysis`.
"""

import re
from typing import List, Optional
from prompt_strength.schemas import DeepAnalysisResult, ExamplePrompt

MAX_LIST_ITEMS = 5
MAX_EXAMPLES = 3
MIN_ITEM_LENGTH = 10
MIN_REWRITE_LINE_LENGTH = 5

NONE, STRENGTHS, IMPROVEMENTS, REWRITTEN, EXAMPLES = (
    "none", "strengths", "improvements", "rewritten", "examples",
)

_NUMBERED = re.compile(r"^\d+[.)]")
_BULLET_PREFIX = re.compile(r"^[-•*]+\s*")
_NUMBER_PREFIX = re.compile(r"^\d+[.)]\s*")
_BOLD_START = re.compile(r"^\*\*")
_BOLD_END = re.compile(r"\*\*$")
_BOLD_EDGES = re.compile(r"^\*\*|\*\*$")
_QUOTE_EDGES = re.compile(r"^[\"']|[\"']$")
_BRACKET_EDGES = re.compile(r"^\[|\]$")
_BLOCKQUOTE = re.compile(r"^>+\s*")
_BOLD_NUMBERED_HEADER = re.compile(r"^\*\*\d+\.")
_NUMBERED_BOLD_HEADER = re.compile(r"^\d+\.\s*\*\*")
_EXAMPLE_LINE = re.compile(r"^[-•*]?\s*\*?\*?\[?([^\]:\n]{3,40})\]?\*?\*?:\s*[\"']?(.{20,})[\"']?$")


def detect_section(lower_line: str) -> Optional[str]:
    """Return the section a header-like line opens, or None for content lines."""
    if "strength" in lower_line and "prompt" not in lower_line:
        return STRENGTHS
    if ("areas to improve" in lower_line or "improvements" in lower_line
            or ("improve" in lower_line and ":" in lower_line)):
        return IMPROVEMENTS
    if any(k in lower_line for k in ("improved version", "rewritten", "revised prompt", "revised version")):
        return REWRITTEN
    if any(k in lower_line for k in ("example prompt", "template prompt", "example templates")):
        return EXAMPLES
    return None


def is_list_item(line: str) -> bool:
    return line.startswith(("-", "•", "*")) or bool(_NUMBERED.match(line))


def clean_list_item(line: str) -> str:
    item = _BULLET_PREFIX.sub("", line)
    item = _NUMBER_PREFIX.sub("", item)
    item = _BOLD_START.sub("", item)
    item = _BOLD_END.sub("", item)
    return item.strip()


def clean_rewrite_line(line: str) -> str:
    cleaned = _QUOTE_EDGES.sub("", line)
    cleaned = _BOLD_EDGES.sub("", cleaned)
    return _BLOCKQUOTE.sub("", cleaned)


def parse_example_line(line: str) -> Optional[ExamplePrompt]:
    """Parse `- **[Title]**: "prompt text"`; anything else returns None."""
    match = _EXAMPLE_LINE.match(line)
    if not match:
        return None
    title = _BRACKET_EDGES.sub("", _BOLD_EDGES.sub("", match.group(1).strip()))
    prompt = _QUOTE_EDGES.sub("", match.group(2).strip())
    return ExamplePrompt(title=title, prompt=prompt)


def parse_analysis_response(content: Optional[str]) -> DeepAnalysisResult:
    """
    Parse an LLM deep analysis reply.

    Input: raw reply text (may be empty or arbitrarily formatted)
    Output: DeepAnalysisResult with strengths/improvements capped at 5,
            rewritten_prompt flattened to one line (None if absent) and
            up to 3 example prompts (None if none were found)
    """
    content = content or ""
    strengths: List[str] = []
    improvements: List[str] = []
    examples: List[ExamplePrompt] = []
    rewritten_parts: List[str] = []
    section = NONE

    for raw_line in content.split("\n"):
        line = raw_line.strip()
        lower_line = line.lower()

        header = detect_section(lower_line)
        if header is not None:
            section = header
            continue

        if section in (STRENGTHS, IMPROVEMENTS):
            if not is_list_item(line):
                continue
            item = clean_list_item(line)
            if len(item) > MIN_ITEM_LENGTH:
                (strengths if section == STRENGTHS else improvements).append(item)

        elif section == REWRITTEN:
            if "example prompt" in lower_line or "template prompt" in lower_line:
                section = EXAMPLES
                continue
            if not line or _BOLD_NUMBERED_HEADER.match(line) or _NUMBERED_BOLD_HEADER.match(lower_line):
                continue
            cleaned = clean_rewrite_line(line)
            if len(cleaned) > MIN_REWRITE_LINE_LENGTH:
                rewritten_parts.append(cleaned)

        elif section == EXAMPLES:
            example = parse_example_line(line)
            if example is not None:
                examples.append(example)

    return DeepAnalysisResult(
        analysis=content,
        strengths=strengths[:MAX_LIST_ITEMS],
        improvements=improvements[:MAX_LIST_ITEMS],
        rewritten_prompt=" ".join(rewritten_parts) or None,
        example_prompts=examples[:MAX_EXAMPLES] or None,
    )
