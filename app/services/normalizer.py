"""
Transcript normalization: filler removal, near-duplicate suppression and length bounding.

The heuristics are deliberately simple and tuned for English auto-generated
captions; the constants live in `NormalizerConfig`.
"""
import re
from collections import Counter

from loguru import logger

from app.core.constants import NormalizerConfig
from app.services.captions import parse_json_timed_text

WHITESPACE_PATTERN = re.compile(r"\s+")


def sentence_similarity(candidate: str, reference: str) -> float:
    """
    Word-overlap similarity between two sentences.

    Shared words are counted with multiplicity (case-insensitive, whitespace
    tokens) and divided by the larger of the two word counts.

    Returns:
        A score in [0, 1]; 0 when either sentence has no words.
    """
    candidate_words = candidate.lower().split()
    reference_words = reference.lower().split()
    if not candidate_words or not reference_words:
        return 0.0

    common = sum((Counter(candidate_words) & Counter(reference_words)).values())
    return common / max(len(candidate_words), len(reference_words))


class CaptionNormalizer:
    """
    Cleans and compresses transcript text before it is sent to the LLM.

    Steps, in order:
    1. Re-parse JSON timed-text passed through unresolved.
    2. Remove filler words and bracketed sound markers.
    3. Drop sentences that nearly repeat the previous kept sentence.
    4. Keep head and tail of over-budget text, abbreviating the middle.
    """

    def __init__(
        self,
        max_chars: int = NormalizerConfig.MAX_CHARS,
        similarity_threshold: float = NormalizerConfig.SIMILARITY_THRESHOLD,
    ):
        """
        Initialize the normalizer.

        Args:
            max_chars: Character budget for the final transcript (~4 chars/token).
            similarity_threshold: Overlap score above which a sentence is a duplicate.
        """
        self.max_chars = max_chars
        self.similarity_threshold = similarity_threshold

    def normalize(self, text: str) -> str:
        """
        Run every normalization step over a transcript.

        Args:
            text: Transcript text (or raw JSON timed-text).

        Returns:
            The normalized, length-bounded transcript.
        """
        if text.strip().startswith("{"):
            parsed = parse_json_timed_text(text)
            if parsed:
                text = parsed

        original_length = len(text)
        text = self.remove_filler_words(text)
        text = self.remove_duplicate_sentences(text)
        text = self.truncate_if_too_long(text)
        text = text.strip()

        logger.debug(f"Normalized transcript from {original_length} to {len(text)} characters")
        return text

    def remove_filler_words(self, text: str) -> str:
        """Replace filler tokens and sound markers with a space, then collapse whitespace."""
        for token in NormalizerConfig.FILLER_TOKENS:
            text = text.replace(token, " ")
        return WHITESPACE_PATTERN.sub(" ", text)

    def is_similar_sentence(self, candidate: str, reference: str) -> bool:
        """Check whether a sentence repeats the reference closely enough to be dropped."""
        if candidate == reference:
            return True
        return sentence_similarity(candidate, reference) > self.similarity_threshold

    def remove_duplicate_sentences(self, text: str) -> str:
        """
        Remove consecutive duplicate or near-duplicate sentences.

        Each sentence is compared only against the last sentence that was kept.
        Fragments shorter than `MIN_SENTENCE_CHARS` are treated as noise.
        """
        delimiter = NormalizerConfig.SENTENCE_DELIMITER

        # Set the closing period aside so the last sentence compares like the rest
        terminal = "." if text.endswith(".") else ""
        body = text[:-1] if terminal else text

        sentences = body.split(delimiter)
        if len(sentences) <= 1:
            return text

        kept = []
        last_sentence = ""
        last_index = len(sentences) - 1
        for index, sentence in enumerate(sentences):
            sentence = sentence.strip()
            # The set-aside period still counts towards the last fragment's length
            measured = len(sentence) + (len(terminal) if index == last_index else 0)
            if measured < NormalizerConfig.MIN_SENTENCE_CHARS:
                continue
            if self.is_similar_sentence(sentence, last_sentence):
                continue
            kept.append(sentence)
            last_sentence = sentence

        if not kept:
            return ""
        return delimiter.join(kept) + terminal

    def truncate_if_too_long(self, text: str) -> str:
        """
        Bound the transcript to the character budget.

        Keeps the first and last 40% of the budget and replaces the middle with
        an abbreviation marker, moving each cut to a nearby sentence boundary.
        """
        if len(text) <= self.max_chars:
            return text

        delimiter = NormalizerConfig.SENTENCE_DELIMITER
        window = NormalizerConfig.BOUNDARY_WINDOW

        head = text[:int(self.max_chars * NormalizerConfig.HEAD_RATIO)]
        tail = text[len(text) - int(self.max_chars * NormalizerConfig.TAIL_RATIO):]

        last_break = head.rfind(delimiter)
        if last_break != -1 and last_break > len(head) - window:
            head = head[:last_break + len(delimiter)]

        first_break = tail.find(delimiter)
        if 0 < first_break < window:
            tail = tail[first_break + len(delimiter):]

        logger.info(f"Transcript of {len(text)} characters abbreviated to fit {self.max_chars}")
        return head + NormalizerConfig.ABBREVIATION_MARKER + tail
