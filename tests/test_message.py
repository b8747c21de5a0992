"""Message construction stories: body selection, purity, receiver snapshot."""

from __future__ import annotations

import pytest

from mailnotify.domain import OutboundMessage, build_message


@pytest.mark.os_agnostic
def test_plain_text_body_goes_into_text_only() -> None:
    """use_plain_text=True fills text and leaves html empty."""
    msg = build_message(["b@x.com"], "a@x.com", "Hi", "hello", use_plain_text=True)

    assert msg.text == "hello"
    assert msg.html == ""


@pytest.mark.os_agnostic
def test_html_body_goes_into_html_only() -> None:
    """use_plain_text=False fills html and leaves text empty."""
    msg = build_message(["b@x.com"], "a@x.com", "Hi", "<p>hello</p>", use_plain_text=False)

    assert msg.html == "<p>hello</p>"
    assert msg.text == ""


@pytest.mark.os_agnostic
def test_identical_inputs_build_equal_messages() -> None:
    """Construction is deterministic."""
    first = build_message(["b@x.com", "c@x.com"], "a@x.com", "Hi", "body", use_plain_text=False)
    second = build_message(["b@x.com", "c@x.com"], "a@x.com", "Hi", "body", use_plain_text=False)

    assert first == second


@pytest.mark.os_agnostic
def test_headers_start_empty() -> None:
    """No headers are added at construction time."""
    msg = build_message(["b@x.com"], "a@x.com", "Hi", "body", use_plain_text=True)

    assert msg.headers == {}


@pytest.mark.os_agnostic
def test_receivers_are_copied_into_the_message() -> None:
    """Mutating the caller's list afterwards leaves the message untouched."""
    receivers = ["b@x.com"]
    msg = build_message(receivers, "a@x.com", "Hi", "body", use_plain_text=True)

    receivers.append("c@x.com")

    assert msg.to == ("b@x.com",)


@pytest.mark.os_agnostic
def test_empty_receivers_build_a_message_without_recipients() -> None:
    """An empty receiver list is allowed."""
    assert build_message([], "a@x.com", "Hi", "body", use_plain_text=True).to == ()


@pytest.mark.os_agnostic
def test_outbound_message_is_frozen() -> None:
    """Fields cannot be reassigned after construction."""
    msg = OutboundMessage(to=("b@x.com",), sender="a@x.com", subject="Hi")

    with pytest.raises(AttributeError):
        msg.subject = "changed"  # type: ignore[misc]
