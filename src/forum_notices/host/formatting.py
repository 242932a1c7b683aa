"""
Rich text formatting of post content.

Post content is written by admins/editors and may contain html,
it is trusted and is not escaped here.
"""

import re

from markupsafe import Markup

BLOCK_TAGS = (
    "table|thead|tfoot|caption|col|colgroup|tbody|tr|td|th|div|dl|dd|dt|ul|ol|li|pre|form|map|area|"
    "blockquote|address|math|style|p|h[1-6]|hr|fieldset|legend|section|article|aside|hgroup|header|"
    "footer|nav|figure|figcaption|details|menu|summary"
)
BLOCK_START_PATTERN = re.compile(rf"^<(?:{BLOCK_TAGS})[\s/>]", re.IGNORECASE)
PARAGRAPH_SPLIT_PATTERN = re.compile(r"\n\s*\n")
LINE_BREAK_PATTERN = re.compile(r"[ \t]*\n[ \t]*")


def autop(text: str, br: bool = True) -> Markup:
    """
    Turn plain text into html paragraphs.

    Blank lines separate paragraphs, each paragraph is wrapped in <p> tags (unless it already
    starts with a block level element) and, if br is True, remaining single newlines become <br />.

    e.g. "Hello\\n\\nWorld" -> "<p>Hello</p>\\n<p>World</p>\\n"
    """
    if not text or not text.strip():
        return Markup("")

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    paragraphs = [paragraph.strip() for paragraph in PARAGRAPH_SPLIT_PATTERN.split(text)]

    output = []
    for paragraph in paragraphs:
        if not paragraph:
            continue
        if BLOCK_START_PATTERN.match(paragraph):
            output.append(paragraph)
            continue
        if br:
            paragraph = LINE_BREAK_PATTERN.sub("<br />\n", paragraph)
        output.append(f"<p>{paragraph}</p>")

    return Markup("\n".join(output) + "\n")
