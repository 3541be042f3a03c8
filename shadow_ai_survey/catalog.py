"""Catalog of predefined AI tools offered in the survey.

Respondents pick tools from this fixed list by identifier; anything else they
type in is a *custom* tool and never goes through the catalog.  The analytics
engine only needs ``name_for`` to turn identifiers into display names, but the
vendor and category data travel with each entry so the presentation layer can
group tools the same way the survey form does.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from shadow_ai_survey import config
from shadow_ai_survey.exceptions import CatalogError

__all__ = [
    "AITool",
    "ToolCatalog",
    "PREDEFINED_AI_TOOLS",
    "DEFAULT_CATALOG",
    "load_catalog",
    "get_default_catalog",
]

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("id", "name", "vendor", "category")


@dataclass(frozen=True)
class AITool:
    """A predefined AI tool with a stable identifier."""

    id: str
    name: str
    vendor: str
    category: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "vendor": self.vendor,
            "category": self.category,
        }


class ToolCatalog:
    """Read-only identifier → :class:`AITool` lookup.

    Iteration yields tools in the order they were supplied.
    """

    __slots__ = ("_tools",)

    def __init__(self, tools: Iterable[AITool]):
        by_id: Dict[str, AITool] = {}
        for tool in tools:
            if tool.id in by_id:
                raise CatalogError(f"Duplicate tool id in catalog: {tool.id}")
            by_id[tool.id] = tool
        self._tools = by_id

    def get(self, tool_id: str) -> Optional[AITool]:
        return self._tools.get(tool_id)

    def name_for(self, tool_id: str) -> str:
        """Return the display name for *tool_id*, or the id itself if unknown."""
        tool = self._tools.get(tool_id)
        return tool.name if tool is not None else tool_id

    def by_category(self) -> Dict[str, List[AITool]]:
        """Group tools by category, keeping catalog order within each group."""
        grouped: Dict[str, List[AITool]] = {}
        for tool in self._tools.values():
            grouped.setdefault(tool.category, []).append(tool)
        return grouped

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __iter__(self) -> Iterator[AITool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolCatalog({len(self._tools)} tools)"


PREDEFINED_AI_TOOLS: tuple[AITool, ...] = (
    # Chatbots & assistants
    AITool("chatgpt", "ChatGPT", "OpenAI", "Chatbot"),
    AITool("claude", "Claude", "Anthropic", "Chatbot"),
    AITool("gemini", "Gemini", "Google", "Chatbot"),
    AITool("copilot", "Microsoft Copilot", "Microsoft", "Chatbot"),
    AITool("perplexity", "Perplexity AI", "Perplexity", "Search"),
    # Coding
    AITool("github-copilot", "GitHub Copilot", "Microsoft", "Coding"),
    AITool("cursor", "Cursor", "Cursor", "Coding"),
    AITool("tabnine", "TabNine", "TabNine", "Coding"),
    AITool("codewhisperer", "Amazon CodeWhisperer", "Amazon", "Coding"),
    # Writing & content
    AITool("jasper", "Jasper", "Jasper AI", "Writing"),
    AITool("copy-ai", "Copy.ai", "Copy.ai", "Writing"),
    AITool("grammarly", "GrammarlyGO", "Grammarly", "Writing"),
    AITool("notion-ai", "Notion AI", "Notion", "Writing"),
    AITool("otter", "Otter.ai", "Otter", "Transcription"),
    # Design & creative
    AITool("midjourney", "MidJourney", "MidJourney", "Image"),
    AITool("dalle", "DALL·E", "OpenAI", "Image"),
    AITool("stable-diffusion", "Stable Diffusion", "Stability AI", "Image"),
    AITool("canva-ai", "Canva AI", "Canva", "Design"),
    AITool("adobe-firefly", "Adobe Firefly", "Adobe", "Image"),
    AITool("runway", "RunwayML", "Runway", "Video"),
    AITool("synthesia", "Synthesia", "Synthesia", "Video"),
    # Automation
    AITool("zapier-ai", "Zapier AI", "Zapier", "Automation"),
    AITool("make-ai", "Make AI", "Make", "Automation"),
)

DEFAULT_CATALOG = ToolCatalog(PREDEFINED_AI_TOOLS)


def _parse_entry(entry: Any, index: int) -> AITool:
    if not isinstance(entry, dict):
        raise CatalogError(f"Catalog entry {index} is not an object")
    missing = [key for key in _REQUIRED_KEYS if not isinstance(entry.get(key), str)]
    if missing:
        raise CatalogError(
            f"Catalog entry {index} is missing string field(s): {', '.join(missing)}"
        )
    return AITool(
        id=entry["id"],
        name=entry["name"],
        vendor=entry["vendor"],
        category=entry["category"],
    )


def load_catalog(path: Union[str, Path]) -> ToolCatalog:
    """Load a catalog from a JSON array of ``{id, name, vendor, category}``."""

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Cannot read tool catalog {path}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Tool catalog {path} is not valid JSON") from exc

    if not isinstance(payload, list):
        raise CatalogError(f"Tool catalog {path} must contain a JSON array")

    catalog = ToolCatalog(_parse_entry(entry, i) for i, entry in enumerate(payload))
    logger.info("Loaded %d AI tools from %s", len(catalog), path)
    return catalog


@lru_cache(maxsize=1)
def get_default_catalog() -> ToolCatalog:
    """Return the process-wide catalog (configured file or built-in list)."""

    if config.TOOL_CATALOG_PATH:
        return load_catalog(config.TOOL_CATALOG_PATH)
    return DEFAULT_CATALOG
