from typing import Optional
from urllib.parse import quote

DEFAULT_PRONUNCIATION_URL = 'https://dict.youdao.com/dictvoice?audio={word}&type=2'


def build_pronunciation_url(word: str, template: Optional[str] = None) -> Optional[str]:
    """Audio URL for ``word``; None when no template is configured."""
    template = DEFAULT_PRONUNCIATION_URL if template is None else template
    if not template or not word:
        return None
    return template.format(word=quote(word.strip()))
