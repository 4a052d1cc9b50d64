from __future__ import annotations

from types import MappingProxyType

from .errors import InvalidNumeral

ONE_MARKER = "元"
ZERO_GLYPH = "零"

FULLWIDTH_DIGIT_PATTERN = str.maketrans({
    "０": "0",
    "１": "1",
    "２": "2",
    "３": "3",
    "４": "4",
    "５": "5",
    "６": "6",
    "７": "7",
    "８": "8",
    "９": "9",
})

ASCII_DIGITS = frozenset("0123456789")

DIGIT_VALUES = MappingProxyType({
    "零": 0,
    "〇": 0,
    "○": 0,
    "一": 1,
    "二": 2,
    "兩": 2,
    "两": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
})
UNIT_VALUES = MappingProxyType({
    "十": 10,
    "百": 100,
    "千": 1000,
    "萬": 10_000,
    "万": 10_000,
})
# 廿 and 卅 stand for a whole value rather than a multiplier.
LITERAL_VALUES = MappingProxyType({
    "廿": 20,
    "卅": 30,
})

DIGIT_GLYPHS = ("", "一", "二", "三", "四", "五", "六", "七", "八", "九")
MAX_ENCODABLE = 9999

NUMERAL_CLASS = (
    "0-9０-９"
    + "".join(DIGIT_VALUES)
    + "".join(UNIT_VALUES)
    + "".join(LITERAL_VALUES)
)


def decode_numeral(text: str) -> int:
    """Convert Chinese numeral text (or plain digits) into an integer.

    Unknown characters are rejected, but the grammar itself is not checked:
    repeated or out-of-order units are folded additively.
    """

    if text is None or not str(text).strip():
        raise InvalidNumeral("Chinese numeral is empty", text=text)

    cleaned = str(text).strip().translate(FULLWIDTH_DIGIT_PATTERN)
    if cleaned == ONE_MARKER:
        return 1
    if all(ch in ASCII_DIGITS for ch in cleaned):
        return int(cleaned)

    result = 0
    current = 0
    for ch in cleaned:
        if ch in DIGIT_VALUES:
            current = current * 10 + DIGIT_VALUES[ch]
            continue
        if ch in LITERAL_VALUES:
            result += LITERAL_VALUES[ch]
            current = 0
            continue
        if ch in UNIT_VALUES:
            result += (current or 1) * UNIT_VALUES[ch]
            current = 0
            continue
        if ch in ASCII_DIGITS:
            current = current * 10 + int(ch)
            continue
        raise InvalidNumeral(f"Unsupported Chinese numeral: {ch} in {text}", text=text)

    return result + current


def encode_numeral(number: int) -> str:
    """Render a positive integer below 10000 as Chinese numerals."""

    if number <= 0:
        raise InvalidNumeral(f"number must be positive: {number}", text=number)
    if number > MAX_ENCODABLE:
        raise InvalidNumeral(f"number too large to format: {number}", text=number)

    if number < 10:
        return DIGIT_GLYPHS[number]
    if number < 20:
        return "十" if number == 10 else "十" + encode_numeral(number - 10)
    if number < 100:
        tens, remainder = divmod(number, 10)
        prefix = "十" if tens == 1 else encode_numeral(tens) + "十"
        return prefix + encode_numeral(remainder) if remainder else prefix
    if number < 1000:
        hundreds, remainder = divmod(number, 100)
        prefix = encode_numeral(hundreds) + "百"
        if remainder == 0:
            return prefix
        if remainder < 10:
            return prefix + ZERO_GLYPH + encode_numeral(remainder)
        remainder_text = encode_numeral(remainder)
        if remainder < 20:
            # 一百一十二 rather than 一百十二
            remainder_text = "一" + remainder_text
        return prefix + remainder_text

    thousands, remainder = divmod(number, 1000)
    prefix = encode_numeral(thousands) + "千"
    if remainder == 0:
        return prefix
    if remainder < 100:
        return prefix + ZERO_GLYPH + encode_numeral(remainder)
    return prefix + encode_numeral(remainder)


__all__ = [
    "NUMERAL_CLASS",
    "decode_numeral",
    "encode_numeral",
]
