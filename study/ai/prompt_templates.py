"""
Prompt Templates Module

Prompt texts and the builders that turn caller input into a ModelRequest.
Builders are pure: the same input always yields an equal request.
"""

from typing import Optional

from .schemas import (
    EVALUATION_RESPONSE_SCHEMA,
    SOLUTION_RESPONSE_SCHEMA,
    ContentPart,
    ModelProfile,
    ModelRequest,
)

# Reasoning budget for requests whose output is machine-parsed
DEEP_THINKING_BUDGET = 32768

DEFAULT_NOTES_TOPIC = "Academic Lecture"

# Used when the student has not named an institution
DEFAULT_TUTOR_INSTITUTION = "a university"


# Scan-to-Score grading prompt
EVALUATE_ANSWER_TEMPLATE = """Analyze this handwritten answer for a university-level exam.

TASK:
1. Accurate Transcription: Read every word carefully.
2. Score: Grade out of 10. Be strict but fair, following typical engineering marking schemes.
3. Gap Analysis: Identify EXACTLY what is missing. Mention technical keywords, diagrams that should have been there, or specific derivations.
4. Key Concepts: List the concepts the student successfully demonstrated.
5. Improvement Tips: Provide 3 actionable tips to get full marks in the next attempt.

VAULT CONTEXT (Prioritize these patterns/policies):
{vault_context}

Return JSON ONLY."""

# Video-to-Notes prompt
VIDEO_NOTES_TEMPLATE = """Act as a senior professor. Watch/Analyze the content of this lecture: {url}
Topic: {topic}

Generate a MASTER STUDY GUIDE:
1. CONCEPTUAL TIMESTAMPS: Break the video into logical segments (e.g., [00:00 - 05:00] Introduction to X).
2. CORE THEMES: 3-5 major pillars discussed.
3. DETAILED NOTES: Bulleted technical breakdown.
4. EXAM PROBABILITY: Rate the likelihood of this appearing in an End-Sem exam.
5. MODEL QUESTIONS: Provide 2 short (2-mark) and 1 long (10-mark) question based on this video.

Format using clean Markdown with bold headers."""

# Quick tutor prompt
TUTOR_TEMPLATE = """You are an AI Tutor for {institution}. Answer this student query concisely and academically: "{query}".
Use a professional yet encouraging tone."""

# Question bank model solution prompt
MODEL_SOLUTION_TEMPLATE = """Question: "{question}"

Generate a 'Perfect Score' solution for a university subjective exam.
STRUCTURE:
- Introduction: Context and definitions.
- Main Body: Detailed points with logical flow.
- Conclusion: Summary/Significance.
- High-Impact Keywords: List 5-8 words that markers look for.

Ensure the content is technically rigorous and uses appropriate engineering/scientific terminology."""


def build_evaluation_request(
    image: bytes,
    vault_context: str = "",
    mime_type: str = "image/jpeg",
) -> ModelRequest:
    """
    Answer-evaluation request: the answer photo plus grading instructions.

    Args:
        image: raw image bytes of the handwritten answer
        vault_context: names/content of known reference documents, injected verbatim
        mime_type: image mime type

    Returns:
        ModelRequest on the DEEP profile with the evaluation schema attached
    """
    text = EVALUATE_ANSWER_TEMPLATE.format(vault_context=vault_context or "")
    return ModelRequest(
        profile=ModelProfile.DEEP,
        parts=(
            ContentPart.inline(image, mime_type),
            ContentPart.from_text(text),
        ),
        response_schema=EVALUATION_RESPONSE_SCHEMA,
        thinking_budget=DEEP_THINKING_BUDGET,
        temperature=0.2,
        max_output_tokens=8192,
    )


def build_notes_request(source_url: str, topic: Optional[str] = None) -> ModelRequest:
    """
    Lecture notes request. Free text on the FAST profile.

    Args:
        source_url: lecture video URL
        topic: optional topic hint (defaults to "Academic Lecture")
    """
    text = VIDEO_NOTES_TEMPLATE.format(
        url=source_url.strip(),
        topic=(topic or "").strip() or DEFAULT_NOTES_TOPIC,
    )
    return ModelRequest(
        profile=ModelProfile.FAST,
        parts=(ContentPart.from_text(text),),
        temperature=0.7,
        max_output_tokens=8192,
    )


def build_tutor_request(question: str, institution_name: Optional[str]) -> ModelRequest:
    institution = (institution_name or "").strip() or DEFAULT_TUTOR_INSTITUTION
    text = TUTOR_TEMPLATE.format(
        institution=institution,
        query=question.strip(),
    )
    return ModelRequest(
        profile=ModelProfile.FAST,
        parts=(ContentPart.from_text(text),),
        temperature=0.7,
        max_output_tokens=2048,
    )


def build_solution_request(question_text: str) -> ModelRequest:
    """
    Model-solution request: introduction, body, conclusion and 5-8 marking keywords.

    Args:
        question_text: the exam question

    Returns:
        ModelRequest on the DEEP profile with the solution schema attached
    """
    text = MODEL_SOLUTION_TEMPLATE.format(question=question_text.strip())
    return ModelRequest(
        profile=ModelProfile.DEEP,
        parts=(ContentPart.from_text(text),),
        response_schema=SOLUTION_RESPONSE_SCHEMA,
        thinking_budget=DEEP_THINKING_BUDGET,
        temperature=0.4,
        max_output_tokens=8192,
    )
