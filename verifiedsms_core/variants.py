"""
verifiedsms_core.variants
-------------------------
Builds the message texts that could end up on the recipient's device once
carriers have touched the SMS. This will never be exhaustive; it covers the
known transformations only:

- the message exactly as authored (always first)
- the message with leading/trailing whitespace trimmed, if that differs
"""

from __future__ import annotations
from typing import List

# Unicode White_Space; the \x1c-\x1f separators str.isspace accepts are not trimmed
WHITESPACE = (
    "\t\n\v\f\r \x85\xa0\u1680"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000"
)


def message_variants(original: str, duplicate_untrimmed: bool = False) -> List[str]:
    """
    Ordered, de-duplicated candidate texts for ``original``.

    ``duplicate_untrimmed`` reproduces the legacy behaviour where the
    untrimmed message was appended a second time instead of the trimmed one.
    """
    variants = [original]

    trimmed = original.strip(WHITESPACE)
    if trimmed != original:
        if duplicate_untrimmed:
            variants.append(original)
        else:
            variants.append(trimmed)

    if duplicate_untrimmed:
        return variants
    return list(dict.fromkeys(variants))


def encode_variants(variants: List[str]) -> List[bytes]:
    return [v.encode("utf-8") for v in variants]
