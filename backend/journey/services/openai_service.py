"""OpenAI互換 Chat Completions サービス (JSONモード)

翻訳 {japanese, english, romaji} と日次サマリー {content, vocab} の2種類を生成する。
クライアントは呼び出し側から渡す (journey.core.clients で起動時に1回生成)。
リトライは行わない。
"""
import json
from typing import Any

from journey.core.config import settings
from journey.core.logging import get_logger

logger = get_logger(__name__)

TRANSLATION_SYSTEM_PROMPT = """You are a Japanese-English translator.
If the input is Japanese, translate to English and provide Romaji.
If the input is English, translate to Japanese and provide Romaji.
Return ONLY JSON in this format: { "japanese": "...", "english": "...", "romaji": "..." }"""

SUMMARY_SYSTEM_PROMPT = """Analyze these translations. Extract vocabulary (word, reading, meaning), key kanji, and grammar patterns.
Create a learning summary.
Return JSON: {
  "content": "markdown string of the summary",
  "vocab": [{ "word": "...", "reading": "...", "meaning": "..." }]
}"""

TRANSLATION_FIELDS = ("japanese", "english", "romaji")


class GenerationError(Exception):
    """テキスト生成の失敗"""


class EmptyResponseError(GenerationError):
    """モデルが本文を返さなかった"""


class MalformedOutputError(GenerationError, ValueError):
    """JSONとして解釈できない、または必須フィールドがない"""


def complete_json(
    client: Any,
    system_prompt: str,
    user_content: str,
    model: str | None = None,
) -> dict:
    """system/userの2メッセージでJSONオブジェクトを要求し、dictで返す"""
    model = model or settings.OPENAI_MODEL
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ],
        response_format={"type": "json_object"},
    )

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise EmptyResponseError("No response from AI")

    try:
        result = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedOutputError(f"AI response is not valid JSON: {e}") from e

    if not isinstance(result, dict):
        raise MalformedOutputError(f"AI response is not a JSON object: {type(result).__name__}")
    return result


def translate_text(client: Any, text: str, model: str | None = None) -> dict:
    """
    日英翻訳。
    Returns: {"japanese": ..., "english": ..., "romaji": ...} (欠けた項目はNone)
    """
    result = complete_json(client, TRANSLATION_SYSTEM_PROMPT, text, model=model)

    if not any(field in result for field in TRANSLATION_FIELDS):
        raise MalformedOutputError(f"翻訳応答に必須フィールドがありません: {list(result.keys())}")

    translation = {field: result.get(field) for field in TRANSLATION_FIELDS}
    logger.info(f"翻訳生成成功: model={model or settings.OPENAI_MODEL}")
    return translation


def generate_summary(client: Any, summary_input: str, model: str | None = None) -> dict:
    """
    翻訳ログから学習サマリーを生成。
    Returns: {"content": "markdown", "vocab": [...]}
    """
    result = complete_json(client, SUMMARY_SYSTEM_PROMPT, summary_input, model=model)

    content = result.get("content")
    if not isinstance(content, str) or not content.strip():
        raise MalformedOutputError(f"サマリー応答にcontentがありません: {list(result.keys())}")

    vocab = result.get("vocab")
    if vocab is None:
        vocab = []
    if not isinstance(vocab, list):
        raise MalformedOutputError(f"vocabが配列ではありません: {type(vocab).__name__}")

    logger.info(f"サマリー生成成功: model={model or settings.OPENAI_MODEL}, vocab={len(vocab)}件")
    return {"content": content, "vocab": vocab}
