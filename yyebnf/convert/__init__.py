"""YACC → EBNF 변환과 자명한 정의 인라인"""

from .inline import (
    InlinePolicy, MAX_TRIVIAL_ALTERNATIVES, MAX_TRIVIAL_SEQUENCE, is_trivial, inline,
)
from .converter import Conversion, convert, production_to_ebnf
