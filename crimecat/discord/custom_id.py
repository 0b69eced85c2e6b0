from __future__ import annotations

from dataclasses import dataclass

SEPARATOR = ":"
MAX_LENGTH = 100  # Discord's custom_id limit


@dataclass(frozen=True)
class CustomId:
    head: str
    handler: str
    option: str = ""
    other: str = ""


def encode_custom_id(head: object, handler: str, option: object = "", other: object = "") -> str:
    """
    "head:handler:option:other", trailing empty parts dropped.

    head is usually a target id (guild, ad, vote); handler names the
    response handler that receives the component interaction.
    """
    parts = [str(head), handler, "" if option is None else str(option), "" if other is None else str(other)]
    if any(SEPARATOR in p for p in parts[:3]):
        raise ValueError(f"custom_id parts must not contain '{SEPARATOR}'")
    while len(parts) > 2 and not parts[-1]:
        parts.pop()
    value = SEPARATOR.join(parts)
    if len(value) > MAX_LENGTH:
        raise ValueError(f"custom_id too long ({len(value)} > {MAX_LENGTH})")
    return value


def decode_custom_id(raw: str) -> CustomId:
    # `other` keeps any remaining separators.
    parts = (raw or "").split(SEPARATOR, 3)
    parts += [""] * (4 - len(parts))
    return CustomId(head=parts[0], handler=parts[1], option=parts[2], other=parts[3])


__all__ = ["SEPARATOR", "MAX_LENGTH", "CustomId", "encode_custom_id", "decode_custom_id"]
