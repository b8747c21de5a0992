"""Outbound message value object and its pure builder."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


def _empty_headers() -> dict[str, str]:
    """Create an empty typed header mapping."""
    return {}


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """A message ready to hand to the SMTP transport.

    Exactly one of ``text`` and ``html`` carries the body; the other is
    an empty string.

    Attributes:
        to: Recipient addresses in the order they were added.
        sender: Envelope and header ``From`` address.
        subject: Subject line.
        headers: Extra headers; empty unless a caller adds some.
        text: Plain-text body.
        html: HTML body.
    """

    to: tuple[str, ...]
    sender: str
    subject: str
    headers: dict[str, str] = field(default_factory=_empty_headers)
    text: str = ""
    html: str = ""


def build_message(
    receivers: Sequence[str],
    sender: str,
    subject: str,
    body: str,
    use_plain_text: bool,
) -> OutboundMessage:
    """Assemble an :class:`OutboundMessage` from configuration and content.

    Deterministic: identical inputs produce equal messages. The receiver
    sequence is copied so later changes to the caller's list do not leak
    into a message that was already built.

    Args:
        receivers: Recipient addresses; may be empty.
        sender: From address.
        subject: Subject line.
        body: Message body.
        use_plain_text: Put ``body`` into ``text`` when True, else into ``html``.

    Returns:
        The assembled message.

    Example:
        >>> msg = build_message(["b@x.com"], "a@x.com", "Hi", "body", use_plain_text=False)
        >>> (msg.to, msg.html, msg.text)
        (('b@x.com',), 'body', '')
        >>> build_message([], "a@x.com", "Hi", "body", use_plain_text=True).text
        'body'
    """
    if use_plain_text:
        return OutboundMessage(to=tuple(receivers), sender=sender, subject=subject, text=body)
    return OutboundMessage(to=tuple(receivers), sender=sender, subject=subject, html=body)


__all__ = ["OutboundMessage", "build_message"]
