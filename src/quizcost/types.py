"""Domain types shared by the estimator, its strategies and callers.

Everything here is an immutable value created per call. Inputs coming from
the quiz-maker API (chunks, distributions, enum names) are accepted in their
loose wire shapes and normalized without raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)


class QuestionType(str, Enum):
    """Question kinds a quiz can be generated with."""

    MCQ_SINGLE = "MCQ_SINGLE"
    MCQ_MULTI = "MCQ_MULTI"
    TRUE_FALSE = "TRUE_FALSE"
    OPEN = "OPEN"
    FILL_GAP = "FILL_GAP"
    ORDERING = "ORDERING"
    COMPLIANCE = "COMPLIANCE"
    MATCHING = "MATCHING"
    HOTSPOT = "HOTSPOT"

    @classmethod
    def parse(cls, value: object) -> QuestionType | None:
        """Return the member for an enum instance or name, else None."""
        return _parse_enum(cls, value)


class Difficulty(str, Enum):
    """Requested question difficulty."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @classmethod
    def parse(cls, value: object) -> Difficulty | None:
        """Return the member for an enum instance or name, else None."""
        return _parse_enum(cls, value)


class QuizScope(str, Enum):
    """Which part of a document a quiz is generated from."""

    ENTIRE_DOCUMENT = "ENTIRE_DOCUMENT"
    SPECIFIC_CHUNKS = "SPECIFIC_CHUNKS"
    SPECIFIC_CHAPTER = "SPECIFIC_CHAPTER"
    SPECIFIC_SECTION = "SPECIFIC_SECTION"

    @classmethod
    def parse(cls, value: object) -> QuizScope | None:
        """Return the member for an enum instance or name, else None."""
        return _parse_enum(cls, value)

    @property
    def is_chunk_scoped(self) -> bool:
        """True when the quiz covers a subset of chunks rather than the whole text."""
        return self is not QuizScope.ENTIRE_DOCUMENT


def _parse_enum(enum_cls: Any, value: object) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in enum_cls.__members__:
            return enum_cls[key]
    return None


# --- Distribution ---

QuestionTypeDistribution = Mapping[QuestionType | str, int]


def normalize_distribution(
    distribution: QuestionTypeDistribution | None,
) -> Mapping[QuestionType, int]:
    """Return the present (count > 0) entries as a frozen, ordered mapping.

    Unknown type names and non-integral counts are dropped; integral floats
    such as ``5.0`` count as ints. Input order is preserved so per-type
    accumulation is deterministic.
    """
    if not distribution or not isinstance(distribution, Mapping):
        return MappingProxyType({})

    present: dict[QuestionType, int] = {}
    for key, count in distribution.items():
        qtype = QuestionType.parse(key)
        if qtype is None:
            log.debug("Skipping unknown question type %r", key)
            continue
        # bool is an int subclass; a True count is not a question count
        if isinstance(count, bool):
            continue
        if isinstance(count, float) and count.is_integer():
            count = int(count)
        if not isinstance(count, int) or count <= 0:
            continue
        present[qtype] = present.get(qtype, 0) + count
    return MappingProxyType(present)


# --- Document chunks ---


@dataclass(frozen=True, slots=True)
class DocumentChunk:
    """A pre-segmented piece of a source document.

    Only ``content`` and ``character_count`` feed the estimate; the remaining
    fields mirror the chunk payload for callers that keep them around.
    """

    content: str | None = None
    character_count: int | None = None
    chunk_index: int | None = None
    title: str | None = None
    chapter_title: str | None = None
    section_title: str | None = None
    chapter_number: int | None = None
    section_number: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentChunk:
        """Build a chunk from the API's camelCase (or snake_case) payload."""

        def pick(camel: str, snake: str) -> Any:
            return data.get(camel, data.get(snake))

        return cls(
            content=data.get("content"),
            character_count=pick("characterCount", "character_count"),
            chunk_index=pick("chunkIndex", "chunk_index"),
            title=data.get("title"),
            chapter_title=pick("chapterTitle", "chapter_title"),
            section_title=pick("sectionTitle", "section_title"),
            chapter_number=pick("chapterNumber", "chapter_number"),
            section_number=pick("sectionNumber", "section_number"),
        )


def effective_char_count(chunk: object) -> int:
    """Return the character size of a chunk.

    Fallback order: length of non-empty ``content``, then a positive
    ``character_count``, then 0. Accepts ``DocumentChunk``, any object with
    those attributes, or a mapping in wire shape.
    """
    if chunk is None:
        return 0
    if isinstance(chunk, Mapping):
        content = chunk.get("content")
        count = chunk.get("characterCount", chunk.get("character_count"))
    else:
        content = getattr(chunk, "content", None)
        count = getattr(chunk, "character_count", None)

    if isinstance(content, str) and content:
        return len(content)
    if isinstance(count, int) and not isinstance(count, bool) and count > 0:
        return count
    return 0


def total_char_count(chunks: Iterable[object] | None) -> int:
    """Sum of ``effective_char_count`` over all chunks."""
    if not chunks:
        return 0
    return sum(effective_char_count(c) for c in chunks)


# --- Result ---


@dataclass(frozen=True, slots=True)
class EstimationResult:
    """Predicted cost of one quiz-generation request."""

    estimated_llm_tokens: int
    estimated_billing_tokens: int
    input_tokens: int = 0
    completion_tokens: int = 0
    strategy: str = ""

    @property
    def total_before_safety(self) -> int:
        """Input plus completion tokens before any safety margin."""
        return self.input_tokens + self.completion_tokens

    def to_dict(self) -> dict[str, int]:
        """Wire form used by the quiz-maker client."""
        return {
            "estimatedLlmTokens": self.estimated_llm_tokens,
            "estimatedBillingTokens": self.estimated_billing_tokens,
            "inputTokens": self.input_tokens,
            "completionTokens": self.completion_tokens,
        }


__all__ = [
    "Difficulty",
    "DocumentChunk",
    "EstimationResult",
    "QuestionType",
    "QuestionTypeDistribution",
    "QuizScope",
    "effective_char_count",
    "normalize_distribution",
    "total_char_count",
]
