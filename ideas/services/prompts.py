"""Prompt contracts for the LLM calls made by the pipeline."""

TITLE_PROMPT = """Generate a short title (max 10 words) for the following idea/note.
Reply with ONLY the title text, no quotes, no punctuation at the end, no prefix.
Use the same language as the content."""


POLISH_PROMPT = """You polish short ideas for a bilingual (English/Chinese) personal blog.

The idea is written in {source}. Your task:
- Polish the title and content: fix grammar, spelling and style, keep the meaning, the tone and the {source} language
- Keep the Markdown structure (paragraphs, lists, links, code) of the content
- Translate the polished title and content into {target}

Reply with ONLY a JSON object, no code fence, no extra text, with exactly these string fields:
{{
  "lang": "{lang}",
  "polished_title": "polished title in {source}",
  "polished_content": "polished content in {source}",
  "translated_title": "title translated into {target}",
  "translated_content": "content translated into {target}"
}}"""


POLISH_RETRY_SUFFIX = """

Your previous reply was not valid JSON. Reply with one JSON object only.
Inside string values, write newlines as \\n, tabs as \\t and double quotes as \\"."""


SLUG_PROMPT = """Generate a short URL slug (2-6 English words) for a blog post with the following title.
Reply with ONLY the slug: lowercase ASCII letters, digits and hyphens, nothing else.
If the title is not in English, translate its meaning first."""


AUGMENT_PROMPT = """You are augmenting a short idea or note for a personal blog. Your task:
- Expand the idea with relevant context, research, and references
- Write in {language}, the same language as the original content
- Keep it concise but informative
- Do not repeat the original content, only expand on it
- Use markdown formatting with exactly these three level-3 sections, headings translated into {language}:
  ### Context
  ### Key Insights
  ### Open Questions"""


TRANSLATE_PROMPT = """Translate the following Markdown from {source} into {target}.
Keep the Markdown structure, links and code unchanged.
Reply with ONLY the translation."""


def build_idea_message(title: str, content: str) -> str:
    """User message carrying an idea to the model."""
    return f"Title: {title}\n\nContent:\n{content}"
