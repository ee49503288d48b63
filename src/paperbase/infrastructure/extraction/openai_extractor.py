"""Metadata extraction through an OpenAI-compatible chat API."""

import asyncio
import json
import re
from dataclasses import replace
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from paperbase.domain.entities import Knowledge
from paperbase.domain.exceptions import ExtractionFailed
from paperbase.infrastructure.extraction.pdf_text import PdfContent, read_pdf

EXTRACTION_PROMPT = """Extract all metadata and information from this research document. \
Return a JSON object with the following structure:

{
  "title": "Full title of the paper",
  "authors": ["Author 1", "Author 2"],
  "abstract": "Complete abstract text",
  "keywords": ["keyword1", "keyword2"],
  "journal": "Journal or conference name",
  "publisher": "Publisher name",
  "publicationDate": "Publication date (YYYY-MM-DD or YYYY)",
  "doi": "DOI if available",
  "isbn": "ISBN if available",
  "volume": "Volume number",
  "issue": "Issue number",
  "pages": "Page range (e.g., '1-10')",
  "language": "Language of the document",
  "itemType": "Type (e.g., 'journalArticle', 'conferencePaper', 'book')",
  "proceedingsTitle": "Proceedings title if conference paper",
  "conferenceName": "Conference name if applicable",
  "place": "Place of publication",
  "series": "Series name if applicable",
  "shortTitle": "Short title if available",
  "url": "URL if available",
  "rights": "Copyright or rights information",
  "year": "Publication year (number)",
  "pageCount": "Total number of pages (number)"
}

If a field is not available, use null. Return ONLY valid JSON."""

_CODE_FENCE = re.compile(r"```(?:json)?\s*|```")

# Characters of page text sent to the model
_MAX_PROMPT_CHARS = 24_000


def parse_extraction_response(text: str) -> dict[str, Any]:
    """Parse model output into a dict, tolerating markdown code fences."""
    cleaned = _CODE_FENCE.sub("", text).strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionFailed(f"Failed to parse extraction results: {e}") from e
    if not isinstance(payload, dict):
        raise ExtractionFailed("Extraction result is not a JSON object")
    return payload


def _fill_from_pdf(knowledge: Knowledge, content: PdfContent) -> Knowledge:
    """Use embedded PDF info where the model returned nothing."""
    updates: dict[str, Any] = {}
    if knowledge.page_count is None:
        updates["page_count"] = content.page_count
    if not knowledge.title and content.info.get("title"):
        updates["title"] = content.info["title"]
    if not knowledge.authors and content.info.get("author"):
        updates["authors"] = [content.info["author"]]
    return replace(knowledge, **updates) if updates else knowledge


class OpenAIMetadataExtractor:
    """Extracts bibliographic metadata from the leading pages of a PDF."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        max_pages: int = 3,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model
        self._max_pages = max_pages

    async def extract(self, data: bytes, filename: str | None = None) -> Knowledge:
        try:
            content = await asyncio.to_thread(read_pdf, data, self._max_pages)
        except ValueError as e:
            raise ExtractionFailed(str(e)) from e
        if not content.text.strip():
            raise ExtractionFailed("PDF has no extractable text")

        user_text = content.text[:_MAX_PROMPT_CHARS]
        if filename:
            user_text = f"File name: {filename}\n\n{user_text}"
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": EXTRACTION_PROMPT},
                    {"role": "user", "content": user_text},
                ],
                response_format={"type": "json_object"},
                temperature=0,
            )
        except OpenAIError as e:
            raise ExtractionFailed(f"Extraction API error: {e}") from e

        if not response.choices:
            raise ExtractionFailed("Extraction API returned no choices")
        payload = parse_extraction_response(response.choices[0].message.content or "")
        return _fill_from_pdf(Knowledge.from_dict(payload), content)

    async def aclose(self) -> None:
        await self._client.close()
