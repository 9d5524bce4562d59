"""CEP (Brazilian postal code) input normalization."""

import re

CEP_DIGITS = 8
PREFIX_DIGITS = 5

_NON_DIGIT = re.compile(r"[^0-9]")
_COMPLETE_CEP = re.compile(r"[0-9]{5}-[0-9]{3}")


def normalize(raw: str | None) -> str:
    """Format raw user input as a CEP, e.g. '01001 000' -> '01001-000'.

    Non-digits are stripped and input is capped at 8 digits. The hyphen
    appears only once a 6th digit has been typed, so partial input stays
    partial ('0100' -> '0100', '010010' -> '01001-0').
    """
    if not raw:
        return ""
    digits = _NON_DIGIT.sub("", raw)[:CEP_DIGITS]
    if len(digits) <= PREFIX_DIGITS:
        return digits
    return f"{digits[:PREFIX_DIGITS]}-{digits[PREFIX_DIGITS:]}"


def is_complete(cep: str) -> bool:
    return bool(_COMPLETE_CEP.fullmatch(cep))
