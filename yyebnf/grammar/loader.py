"""문법/보조 EBNF 리소스 로더"""

from __future__ import annotations
from pathlib    import Path

from ..errors import ResourceError


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text (개행은 '\\n'으로 통일)
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(path, getattr(e, "strerror", None) or str(e)) from e
    return text.replace("\r\n", "\n").replace("\r", "\n")
