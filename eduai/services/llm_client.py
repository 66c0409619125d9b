"""
LLM Client Service
Calls an OpenAI-compatible chat completions endpoint (OpenRouter by default)
to generate course content. One blocking request per call: no retries,
no streaming.
"""

import logging
from typing import Optional

import openai
from openai import OpenAI

from eduai.core.config import settings
from eduai.core.errors import GenerationConfigError, GenerationError

logger = logging.getLogger(__name__)

# Global client cache, keyed by the API key it was built with
_client_instance: Optional[OpenAI] = None
_client_key: Optional[str] = None

SYSTEM_PROMPT_TEMPLATE = (
    "You are an expert educational content creator. Generate high-quality, "
    "engaging {content_type} content for university-level courses. Structure "
    "your content with clear headings, bullet points, and examples where "
    "appropriate. Make it educational, comprehensive, and easy to understand."
)

_DEFAULT_PROMPTS = {
    "lesson": "Create a comprehensive lesson plan for {title} ({code}).",
    "assignment": "Create an assignment for {title} ({code}).",
    "quiz": "Create quiz questions for {title} ({code}).",
    "summary": "Create a course summary for {title} ({code}).",
    "notes": "Create study notes for {title} ({code}).",
}


def _require_api_key() -> str:
    api_key = (settings.OPENROUTER_API_KEY or "").strip()
    if not api_key:
        raise GenerationConfigError("OpenRouter API key is not configured")
    return api_key


def reload_client() -> OpenAI:
    """
    Build a fresh client from the current settings.
    Raises GenerationConfigError when no API key is set.
    """
    global _client_instance, _client_key

    api_key = _require_api_key()
    _client_instance = OpenAI(
        api_key=api_key,
        base_url=settings.OPENROUTER_BASE_URL,
        timeout=settings.GENERATION_TIMEOUT_SECONDS,
        max_retries=0,
        default_headers={
            "HTTP-Referer": settings.APP_ORIGIN,
            "X-Title": settings.APP_TITLE,
        },
    )
    _client_key = api_key
    logger.info(f"LLM client configured for {settings.OPENROUTER_BASE_URL}")
    return _client_instance


def _get_client() -> OpenAI:
    """
    Get or build the client. Rebuilt when the configured key changes.
    """
    api_key = _require_api_key()
    if _client_instance is None or _client_key != api_key:
        return reload_client()
    return _client_instance


def build_system_prompt(content_type: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(content_type=content_type)


def build_default_prompt(
    title: str | None,
    code: str | None,
    description: str | None,
    content_type: str,
) -> str:
    """
    Prompt used when the lecturer leaves the prompt blank.
    """
    title = title or "Selected Course"
    code = code or ""

    template = _DEFAULT_PROMPTS.get(content_type)
    if template is None:
        return f"Create {content_type} content for {title}"

    prompt = template.format(title=title, code=code)
    if description:
        prompt = f"{prompt} Course context: {description}"
    return prompt


def generate_course_content(prompt: str, content_type: str = "lesson") -> str:
    """
    Generate educational text for a prompt.

    Args:
        prompt: The user prompt (custom or built by build_default_prompt)
        content_type: lesson / assignment / quiz / notes / summary

    Returns:
        The generated text.

    Raises:
        GenerationConfigError: API key missing; no request is made
        GenerationError: the API call failed or returned no text
    """
    client = _get_client()

    try:
        response = client.chat.completions.create(
            model=settings.GENERATION_MODEL,
            messages=[
                {"role": "system", "content": build_system_prompt(content_type)},
                {"role": "user", "content": prompt},
            ],
            max_tokens=settings.GENERATION_MAX_TOKENS,
            temperature=settings.GENERATION_TEMPERATURE,
        )
    except openai.APIStatusError as e:
        logger.error(
            f"Generation API returned {e.status_code}: {e.message}", exc_info=True
        )
        raise GenerationError(f"OpenRouter API error: {e.message}") from e
    except openai.OpenAIError as e:
        logger.error(f"Generation request failed: {e}", exc_info=True)
        raise GenerationError(f"OpenRouter API error: {e}") from e

    content = None
    if response.choices:
        content = response.choices[0].message.content

    if not content or not content.strip():
        logger.error(f"Generation returned no content (model={settings.GENERATION_MODEL})")
        raise GenerationError("Failed to generate content")

    logger.info(
        f"Generated {content_type} content: {len(content)} chars, "
        f"model={settings.GENERATION_MODEL}"
    )
    return content
