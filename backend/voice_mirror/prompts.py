"""Centralized prompt templates for research answers and style transfer."""
from enum import Enum
from typing import List


class AnswerLength(str, Enum):
    """Requested length of a research answer."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


MAX_SENTENCES = {
    AnswerLength.SHORT: 3,
    AnswerLength.MEDIUM: 5,
    AnswerLength.LONG: 10,
}

SOURCE_SEPARATOR = "\n\n---\n\n"

_STYLE_ANALYSIS = """1. **Analyze the Writing Sample:** First, silently analyze the text provided within the `<{tag}>` tags and deconstruct the author's stylistic fingerprint:
   * **Vocabulary:** Use ONLY words that appear in the sample text or very close synonyms. Do NOT introduce vocabulary more sophisticated than what the author uses.
   * **Sentence Structure:** Average sentence length, rhythm, and the mix of simple, compound, and complex sentences.
   * **Punctuation:** Common habits, such as semicolons or Oxford commas.
   * **Tone:** The overall voice (e.g., academic, casual, critical, enthusiastic).
   * **Transitions:** How ideas are linked (e.g., "Furthermore," "However," "On the other hand,")."""

_OUTPUT_PURITY = (
    "* **Output Purity:** Your entire output must consist ONLY of the {what}. Do NOT include any "
    "commentary, explanations, analysis, apologies, or notes about your process. Do not enclose "
    "the output in quotes."
)


def length_rule(answer_length: AnswerLength) -> str:
    """Build the sentence-cap instruction for a research answer."""
    answer_length = AnswerLength(answer_length)
    limit = MAX_SENTENCES[answer_length]
    return (
        f"IMPORTANT: You MUST NOT exceed {limit} sentences for a {answer_length.value} answer. "
        "Your answer must be complete and well-structured within this limit. If you cannot answer "
        "fully, summarize or condense as needed, but do not exceed the sentence limit. "
        "Do not cut off mid-idea."
    )


class ResearchPrompt:
    """Prompt template for answering a question from source material in the user's voice."""

    SYSTEM_MESSAGE = "\n\n".join(
        [
            "You are an expert linguistic analyst and research assistant. You answer questions "
            "based on provided source material while writing in a specific author's unique style.",
            _STYLE_ANALYSIS.format(tag="style"),
            "2. **Answer the Question:** Answer the question within the `<question>` tags using ONLY "
            "information from the source material within the `<source>` tags, applying the "
            "stylistic fingerprint. The writing sample is ONLY for learning style; never mention "
            "its topics or content.",
            "**CRITICAL OUTPUT REQUIREMENTS:**\n"
            "* **Source Material Only:** Do NOT add external knowledge or background context.\n"
            "* **Register:** Match the simplicity and formality of the question, not the samples.\n"
            + _OUTPUT_PURITY.format(what="answer"),
        ]
    )

    @staticmethod
    def build(
        question: str,
        writing_samples: str,
        chunks: List[str],
        answer_length: AnswerLength = AnswerLength.MEDIUM,
    ) -> str:
        """
        Build the research answer prompt.

        Args:
            question: User's question
            writing_samples: Combined, cleaned writing samples
            chunks: Selected source chunk texts, most relevant first
            answer_length: Requested answer length

        Returns:
            Formatted prompt string
        """
        source = SOURCE_SEPARATOR.join(chunks)
        return (
            f"<style>\n{writing_samples}\n</style>\n\n"
            f"<source>\n{source}\n</source>\n\n"
            f"<question>\n{question}\n</question>\n\n"
            f"{length_rule(answer_length)}\n\n"
            "Answer using ONLY information from the source material, written in the author's style. "
            "If the source material doesn't contain enough information to answer the question, "
            "explain what information is missing."
        )


class StyleTransferPrompt:
    """Prompt template for rewriting text in the user's voice."""

    SYSTEM_MESSAGE = "\n\n".join(
        [
            "You are an expert linguistic analyst and stylistic chameleon. You analyze a writing "
            "sample and rewrite a new piece of text to match the original author's style.",
            _STYLE_ANALYSIS.format(tag="sample"),
            "2. **Rewrite the Target Text:** Rewrite the text within the `<rewrite>` tags so it "
            "sounds as if the original author wrote it. The sample is ONLY for learning style; "
            "never mention its topics or content.",
            "**CRITICAL OUTPUT REQUIREMENTS:**\n"
            "* **Length Parity:** Keep the word count within 10-20% of the original text.\n"
            "* **Content Fidelity:** Preserve the meaning and level of detail. Do not invent information.\n"
            + _OUTPUT_PURITY.format(what="rewritten text"),
        ]
    )

    @staticmethod
    def word_count(input_text: str) -> int:
        """Count words the way the length-parity note reports them."""
        return len(input_text.split(" "))

    @staticmethod
    def build(input_text: str, writing_samples: str) -> str:
        """
        Build the style transfer prompt.

        Args:
            input_text: Text to rewrite
            writing_samples: Combined, cleaned writing samples

        Returns:
            Formatted prompt string
        """
        word_count = StyleTransferPrompt.word_count(input_text)
        return (
            f"<sample>\n{writing_samples}\n</sample>\n\n"
            f"<rewrite>\n{input_text}\n</rewrite>\n\n"
            f"IMPORTANT: The text to rewrite is {word_count} words long. "
            "Your output must be of a similar length."
        )
