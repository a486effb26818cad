"""Instruction templates sent as the user message of each model call."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from orientlink.errors import ModelCallError

SYSTEM_PROMPT_VERSION = "orientlink.v1"
_PROMPT_FILES: dict[str, Path] = {
    "orientlink.v1": Path(__file__).resolve().parent / "prompts" / "system_v1.txt",
}

_ANALYSIS_TEMPLATE = """\
Analyze this business message and provide a comprehensive response in JSON format.

Message: "{message}"
Source Language: {source_lang}
Target Language: {target_lang}
{context_line}

Respond with this exact JSON structure:
{{
  "translatedMessage": "accurate translation here",
  "interpretation": {{
    "businessContext": "explain what this message means in business terms",
    "sentiment": "positive/neutral/negative/urgent",
    "keyTerms": ["list", "of", "important", "business", "terms"],
    "riskLevel": "low/medium/high"
  }},
  "alerts": ["warning 1", "warning 2"],
  "suggestedResponses": {{
    "formal": {{ "zh": "formal Chinese response", "es": "formal Spanish response" }},
    "negotiator": {{ "zh": "negotiating Chinese response", "es": "negotiating Spanish response" }},
    "direct": {{ "zh": "direct Chinese response", "es": "direct Spanish response" }}
  }}
}}

For each suggested response (formal, negotiator, direct), provide both the Chinese (zh) and Spanish (es) versions.

Alerts should include:
- Unusual MOQ requirements
- Suspicious pricing
- Unclear delivery terms
- Missing certifications mentions
- Pressure tactics or urgency without justification
"""

_PROVIDER_TEMPLATE = """\
Analyze this Alibaba provider/product URL and extract business information.

URL: {url}
{context_line}

Note: You cannot actually browse the URL, but infer what data should be extracted.
Use null for any numeric value you cannot determine.

Respond with this exact JSON structure:
{{
  "providerName": "extracted or 'Unknown'",
  "productName": "extracted or 'Unknown'",
  "moq": null or number,
  "pricePerUnit": null or number,
  "currency": "USD/CNY/etc or null",
  "certifications": ["cert1", "cert2"],
  "deliveryTimeDays": null or number,
  "additionalInfo": "any other relevant details",
  "riskAssessment": {{
    "overallRisk": "low/medium/high",
    "warnings": ["warning 1", "warning 2"],
    "recommendation": "advice for the buyer"
  }}
}}

Risk assessment should consider:
- Price too good to be true
- Very low/high MOQ
- Lack of certifications
- Unusual delivery terms
"""

_RESPONSES_TEMPLATE = """\
Generate appropriate business responses for this situation in both Chinese (zh) and Spanish (es).

Context: {context}
User's Intent: {intent}
Response Type: {tone_filter}

Respond with this exact JSON structure, including only the requested tones:
{{
  "responses": {{
{tone_lines}
  }},
  "explanation": "brief explanation of the approach taken"
}}

For each response type, provide both the Chinese (zh) and Spanish (es) versions.

Guidelines:
- FORMAL: Use 您, 贵公司, respectful terms, complete sentences
- NEGOTIATOR: Balance politeness with assertiveness, 我们可以, 希望
- DIRECT: Clear, brief, 我需要, direct questions
"""

_TONE_LINES: dict[str, str] = {
    "formal": '    "formal": { "zh": "formal Chinese response", "es": "formal Spanish response" }',
    "negotiator": (
        '    "negotiator": { "zh": "negotiating Chinese response", "es": "negotiating Spanish response" }'
    ),
    "direct": '    "direct": { "zh": "direct Chinese response", "es": "direct Spanish response" }',
}
TONES: tuple[str, ...] = ("formal", "negotiator", "direct")


@lru_cache(maxsize=4)
def get_system_prompt(version: str = SYSTEM_PROMPT_VERSION) -> str:
    """Load the shared system preamble sent with every model call."""

    prompt_file = _PROMPT_FILES.get(version)
    if prompt_file is None:
        raise ModelCallError(f"System prompt version is not registered: {version}")
    try:
        prompt_text = prompt_file.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ModelCallError(f"Failed to load system prompt file: {prompt_file}") from exc
    if not prompt_text:
        raise ModelCallError(f"System prompt file is empty: {prompt_file}")
    return prompt_text


def build_analysis_prompt(
    message: str,
    source_lang: str,
    target_lang: str,
    prior_context: str | None = None,
) -> str:
    context_line = f"Previous context: {prior_context}" if prior_context else ""
    return _ANALYSIS_TEMPLATE.format(
        message=message,
        source_lang=source_lang,
        target_lang=target_lang,
        context_line=context_line,
    )


def build_provider_extraction_prompt(url: str, context: str | None = None) -> str:
    context_line = f"Additional context: {context}" if context else ""
    return _PROVIDER_TEMPLATE.format(url=url, context_line=context_line)


def selected_tones(tone_filter: str) -> tuple[str, ...]:
    """Expand a tone selector into the tones it names."""

    if tone_filter == "all":
        return TONES
    if tone_filter not in TONES:
        raise ValueError(f"Unknown response tone: {tone_filter}")
    return (tone_filter,)


def build_response_prompt(context: str, intent: str | None, tone_filter: str) -> str:
    tone_lines = ",\n".join(_TONE_LINES[tone] for tone in selected_tones(tone_filter))
    return _RESPONSES_TEMPLATE.format(
        context=context,
        intent=intent or "Not specified",
        tone_filter=tone_filter,
        tone_lines=tone_lines,
    )
