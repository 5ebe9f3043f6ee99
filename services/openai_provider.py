import math

from openai import OpenAI, APIConnectionError, APIStatusError

from config.settings import Config
from models.message import ReportChunkRequest
from utils.errors import ConfigurationError, EmptyResponseError, UpstreamError
from utils.logger import get_logger

logger = get_logger(__name__)

INCREMENTAL_GUIDANCE = (
    "You are receiving the report incrementally. Merge new insights into the existing "
    "partial report without duplicating sections. Preserve structure and tags strictly."
)
FIRST_PASS_GUIDANCE = "Generate the complete report strictly following the provided structure and tags."
REPORT_RULES = (
    "Rules:\n"
    "- Only output the report body.\n"
    "- Preserve tags, headings, and JSON keys exactly.\n"
    "- No prose outside the report.\n"
    "- If information is missing, leave placeholders clearly marked TODO."
)


def _field(record, name):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def normalize_messages(raw_messages):
    """Drop entries without usable text and trim the rest, keeping transcript order."""
    normalized = []
    for record in raw_messages or []:
        if record is None:
            continue
        content = _field(record, "content")
        if not isinstance(content, str) or not content.strip():
            continue
        normalized.append({"role": _field(record, "role"), "content": content.strip()})
    return normalized


def build_report_system_message(base_instruction, partial_report=None):
    """
    Build a compact system message that guides the model to fill a fixed report.
    It supports incremental fills when partial_report is provided.
    """
    guidance = INCREMENTAL_GUIDANCE if partial_report else FIRST_PASS_GUIDANCE
    return f"{base_instruction}\n\n{guidance}\n\n{REPORT_RULES}"


def chunk_messages(items, parts):
    """Split messages into at most `parts` contiguous, roughly equal chunks."""
    if parts <= 1:
        return [items]
    if not items:
        return []
    size = math.ceil(len(items) / parts)
    return [items[i:i + size] for i in range(0, len(items), size)]


def resolve_part_count(message_count, threshold_count, max_parts):
    if message_count > threshold_count * 3:
        parts = 4
    elif message_count > threshold_count * 2:
        parts = 3
    else:
        parts = 2
    return min(max_parts, parts)


def _extract_content(response):
    try:
        choice = response.choices[0]
    except (AttributeError, IndexError, TypeError):
        return None
    content = getattr(getattr(choice, "message", None), "content", None)
    if content is None:
        content = getattr(getattr(choice, "delta", None), "content", None)
    return content


def _make_client(api_key):
    return OpenAI(
        api_key=api_key,
        base_url=Config.OPENAI_BASE_URL,
        timeout=Config.OPENAI_TIMEOUT_SECONDS,
        max_retries=0,
    )


def call_openai_for_report(api_key, request: ReportChunkRequest, client=None) -> str:
    """Call OpenAI with a system instruction plus payload messages."""
    if not api_key:
        raise ConfigurationError("Missing OpenAI API key.")

    model = request.model or Config.OPENAI_REPORT_MODEL
    messages = [{"role": "system", "content": request.system_instruction}]
    if request.partial_report:
        messages.append({"role": "assistant", "content": request.partial_report})
    messages.extend(request.payload_messages)

    logger.info(
        f"[OPENAI] report request model={model} systemLen={len(request.system_instruction)} "
        f"payloadCount={len(request.payload_messages)} hasPartial={bool(request.partial_report)}"
    )

    client = client or _make_client(api_key)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            **Config.OPENAI_GENERATION_CONFIG,
        )
    except APIStatusError as e:
        body = e.response.text if e.response is not None else str(e)
        logger.error(f"[OPENAI] report error status={e.status_code} body={body}")
        raise UpstreamError("OpenAI", e.status_code, body) from e
    except APIConnectionError as e:
        logger.error(f"[OPENAI] report request failed: {e}")
        raise UpstreamError("OpenAI", None, str(e)) from e

    content = _extract_content(response)
    if not isinstance(content, str) or not content.strip():
        raise EmptyResponseError("OpenAI returned empty content")
    return content.strip()


def generate_report_with_chunking(
    api_key,
    base_instruction,
    full_messages,
    threshold_count=60,
    max_parts=4,
    model=None,
    client=None,
) -> str:
    """
    Produce one finished report from a (possibly long) transcript.

    Transcripts at or below `threshold_count` messages go out in a single call.
    Longer ones are split into 2-4 sequential chunks (capped by `max_parts`); each
    call receives the previous call's output as the partial report to merge into.
    The first failing call aborts the whole run and its error propagates.
    """
    if threshold_count is None or threshold_count < 1:
        raise ValueError("threshold_count must be a positive integer")
    if max_parts is None or max_parts < 1:
        raise ValueError("max_parts must be a positive integer")

    normalized = normalize_messages(full_messages)

    if len(normalized) <= threshold_count:
        system_instruction = build_report_system_message(base_instruction)
        return call_openai_for_report(
            api_key,
            ReportChunkRequest(
                system_instruction=system_instruction,
                payload_messages=normalized,
                model=model,
            ),
            client=client,
        )

    parts = resolve_part_count(len(normalized), threshold_count, max_parts)
    chunks = chunk_messages(normalized, parts)
    logger.info(f"[OPENAI] transcript of {len(normalized)} messages split into {len(chunks)} chunks")

    partial_report = None
    for index, chunk in enumerate(chunks, start=1):
        system_instruction = build_report_system_message(base_instruction, partial_report)
        partial_report = call_openai_for_report(
            api_key,
            ReportChunkRequest(
                system_instruction=system_instruction,
                payload_messages=chunk,
                partial_report=partial_report,
                model=model,
            ),
            client=client,
        )
        logger.info(f"[OPENAI] chunk {index}/{len(chunks)} merged, report length {len(partial_report)}")
    return partial_report or ""
