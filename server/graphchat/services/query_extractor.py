import re
from typing import Optional

from pydantic import BaseModel

CLOSING_FENCE = "```"

# Language tags that mark a fenced block as a graph query. Empty means untagged.
QUERY_LANGUAGES = {"", "sparql", "cypher"}

# A language tag only counts when the rest of the opening line is blank.
_FENCE_RE = re.compile(
    r"(?P<fence>```(?:(?P<lang>[A-Za-z0-9_+-]+)(?=[^\S\n]*\n))?[^\S\n]*)(?P<body>.*?)```",
    re.DOTALL,
)


class ExtractedQuery(BaseModel):
    """
    A graph query split out of an LLM response.

    `pre + fence + body + "```" + post` reproduces the original text.
    """
    pre: str
    query: str
    post: str
    fence: str
    body: str


def extract_query(text: str) -> Optional[ExtractedQuery]:
    """
    Find the first fenced sparql/cypher (or untagged) block in `text`.

    Returns None when there is no such block; callers then show the text as
    plain prose. The query is not checked for validity here.
    """
    for match in _FENCE_RE.finditer(text):
        if (match.group("lang") or "").lower() not in QUERY_LANGUAGES:
            continue
        body = match.group("body")
        return ExtractedQuery(
            pre=text[:match.start()],
            query=body.strip(),
            post=text[match.end():],
            fence=match.group("fence"),
            body=body,
        )
    return None
