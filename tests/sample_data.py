"""
Test data shared across test modules.

Sample LLM replies and augmentation blocks. Update values here when the
prompt contract changes - no need to modify test scripts.
"""

import json
from datetime import datetime


SUBMITTED_AT = datetime(2025, 11, 2, 9, 30, 0)

EN_RESULT = {
    "lang": "en",
    "polished_title": "Notes Should Be Bilingual",
    "polished_content": "Every note I write should exist in two languages.\n\nThis makes it reachable.",
    "translated_title": "笔记应当双语",
    "translated_content": "我写的每一条笔记都应该有两种语言。\n\n这样更容易被读到。",
}

ZH_RESULT = {
    "lang": "zh",
    "polished_title": "关于缓存的想法",
    "polished_content": "缓存失效是计算机科学中最难的问题之一。",
    "translated_title": "A Thought on Caching",
    "translated_content": "Cache invalidation is one of the hardest problems in computer science.",
}

AUGMENTED_EN = "### Context\n\nSome context.\n\n### Key Insights\n\n- One\n\n### Open Questions\n\n- Why?"
AUGMENTED_ZH = "### 背景\n\n一些背景。\n\n### 关键洞见\n\n- 一\n\n### 开放问题\n\n- 为什么？"


def reply_with_raw_newlines(data: dict) -> str:
    """Serialize like a careless model: real newlines left inside strings."""
    text = json.dumps(data, ensure_ascii=False, indent=2)
    return text.replace("\\n", "\n")
