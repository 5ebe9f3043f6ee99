import re

import requests

from config.settings import Config
from services.persona_service import build_system_prompt
from utils.errors import ConfigurationError, EmptyResponseError, UpstreamError
from utils.logger import get_logger

logger = get_logger(__name__)

TITLE_INSTRUCTION = (
    "You are a helpful assistant that generates a chat title. Title should be 2 to 3 words, "
    "meaningful. If greetings only → 'Greeting'."
)

_SCORING_RE = re.compile(r"(Total Score:\s*\d+\s*/\s*\d+|Score Awarded:\s*[+-]?\d+\s*points?)", re.IGNORECASE)
_TAG_RE = re.compile(r"\[(HISTORY|CURRENT)\]", re.IGNORECASE)


def to_gemini_role(role):
    return "model" if role == "assistant" else "user"


def strip_scoring_artifacts(text):
    return _SCORING_RE.sub("", text).strip()


def clean_gemini_text(raw):
    """Tidy whitespace and remove prompt tags and score lines from a Gemini reply."""
    text = re.sub(r"^[^\S\n]+", "", raw, flags=re.MULTILINE)
    text = re.sub(r"\n{2,}", "\n", text)
    text = re.sub(r"\n+\Z", "", text)
    text = _TAG_RE.sub("", text).strip()
    return strip_scoring_artifacts(text)


def _safe_messages(messages):
    safe = []
    for m in messages or []:
        if isinstance(m, dict):
            role, content = m.get("role") or "user", m.get("content")
        else:
            role, content = getattr(m, "role", None) or "user", getattr(m, "content", None)
        if not isinstance(content, str):
            content = "" if content is None else str(content)
        if content.strip():
            safe.append({"role": role, "content": content})
    return safe


def _extract_text(data):
    try:
        part = data["candidates"][0]["content"]["parts"][0]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(part, dict):
        return ""
    text = part.get("text")
    if text is None:
        text = (part.get("inline_data") or {}).get("data", "")
    return text


def _post_generate(api_key, request_body, purpose):
    try:
        response = requests.post(
            Config.GEMINI_API_URL,
            params={"key": api_key},
            json=request_body,
            headers={"Content-Type": "application/json"},
            timeout=Config.GEMINI_TIMEOUT_SECONDS,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"[GEMINI] {purpose} request failed: {e}")
        raise UpstreamError("Gemini", None, str(e)) from e

    if not response.ok:
        logger.error(f"[GEMINI] {purpose} error status={response.status_code} body={response.text[:500]}")
        raise UpstreamError("Gemini", response.status_code, response.text)

    try:
        return response.json()
    except ValueError as e:
        raise EmptyResponseError(f"Invalid Gemini API response: {e}") from e


def call_gemini_api(messages, api_key, active_role):
    """Send the chat history to Gemini as the given advisor persona and return the cleaned reply."""
    if not api_key:
        raise ConfigurationError("Missing Gemini API key.")

    system_instruction = build_system_prompt(active_role)
    contents = [
        {"role": to_gemini_role(m["role"]), "parts": [{"text": m["content"]}]}
        for m in _safe_messages(messages)
    ]
    request_body = {
        "system_instruction": {"parts": [{"text": system_instruction}]},
        "contents": contents,
        "generationConfig": Config.GEMINI_GENERATION_CONFIG,
    }

    logger.info(
        f"[GEMINI] chat request role={active_role} systemLen={len(system_instruction)} "
        f"messageCount={len(contents)}"
    )
    data = _post_generate(api_key, request_body, "chat")

    raw = _extract_text(data)
    if not isinstance(raw, str) or not raw.strip():
        logger.error(f"[GEMINI] invalid response: {data}")
        raise EmptyResponseError("Invalid Gemini API response: No text content found.")

    cleaned = clean_gemini_text(raw)
    logger.info(f"[GEMINI] reply received originalLength={len(raw)} cleanedLength={len(cleaned)}")
    return {"cleaned": cleaned}


def call_gemini_for_title(user_msg, api_key=None):
    """Gemini title generator (2-3 words)."""
    api_key = api_key or Config.GEMINI_API_KEY
    if not api_key:
        raise ConfigurationError("Missing Gemini API key.")

    request_body = {
        "system_instruction": {"parts": [{"text": TITLE_INSTRUCTION}]},
        "contents": [{"role": "user", "parts": [{"text": user_msg}]}],
        "generationConfig": Config.GEMINI_GENERATION_CONFIG,
    }
    data = _post_generate(api_key, request_body, "title")

    raw = _extract_text(data)
    if not isinstance(raw, str) or not raw.strip():
        logger.error(f"[GEMINI] title generation failed: {data}")
        raise EmptyResponseError("Invalid Gemini API response: No title found.")

    title = raw.strip()
    logger.info(f"[GEMINI] title generated: {title}")
    return title
