"""Authentication scheme stories: PLAIN safety checks, LOGIN prompts, smtplib exchange."""

from __future__ import annotations

import base64

import pytest

from mailnotify.domain import AuthenticationError, LoginAuth, PlainAuth, ServerInfo

# ======================== PlainAuth ========================


@pytest.mark.os_agnostic
def test_plain_auth_answers_with_nul_separated_credentials() -> None:
    """The initial response is identity NUL username NUL password."""
    auth = PlainAuth("admin", "user", "secret", "smtp.example.com")

    assert auth() == "admin\0user\0secret"


@pytest.mark.os_agnostic
def test_plain_auth_mechanism_is_plain() -> None:
    """AUTH PLAIN is announced to the server."""
    assert PlainAuth("", "user", "secret", "smtp.example.com").mechanism == "PLAIN"


@pytest.mark.os_agnostic
def test_plain_auth_accepts_matching_tls_server() -> None:
    """An encrypted connection to the expected host passes."""
    auth = PlainAuth("", "user", "secret", "smtp.example.com")

    auth.start(ServerInfo(name="smtp.example.com", tls=True, mechanisms=("PLAIN",)))


@pytest.mark.os_agnostic
def test_plain_auth_refuses_unencrypted_remote_server() -> None:
    """Credentials never travel in clear text to a remote host."""
    auth = PlainAuth("", "user", "secret", "smtp.example.com")

    with pytest.raises(AuthenticationError, match="unencrypted connection"):
        auth.start(ServerInfo(name="smtp.example.com", tls=False))


@pytest.mark.os_agnostic
@pytest.mark.parametrize("host", ["localhost", "127.0.0.1", "::1"])
def test_plain_auth_allows_unencrypted_localhost(host: str) -> None:
    """Local relays may be used without TLS."""
    auth = PlainAuth("", "user", "secret", host)

    auth.start(ServerInfo(name=host, tls=False))


@pytest.mark.os_agnostic
def test_plain_auth_refuses_other_host() -> None:
    """Credentials bound to one host are not sent to another."""
    auth = PlainAuth("", "user", "secret", "smtp.example.com")

    with pytest.raises(AuthenticationError, match="wrong host name"):
        auth.start(ServerInfo(name="smtp.evil.example", tls=True))


@pytest.mark.os_agnostic
def test_plain_auth_repr_hides_password() -> None:
    """repr shows the username but never the password."""
    text = repr(PlainAuth("", "user", "hunter2", "smtp.example.com"))

    assert "user" in text
    assert "hunter2" not in text


@pytest.mark.os_agnostic
def test_plain_auth_constructions_are_independent() -> None:
    """Two schemes built from different values share nothing."""
    first = PlainAuth("", "alice", "one", "smtp.example.com")
    second = PlainAuth("", "bob", "two", "smtp.example.com")

    assert first() != second()
    assert first == PlainAuth("", "alice", "one", "smtp.example.com")


# ======================== LoginAuth ========================


@pytest.mark.os_agnostic
def test_login_auth_sends_no_initial_response() -> None:
    """LOGIN waits for the server's first prompt."""
    assert LoginAuth("user", "secret")() is None


@pytest.mark.os_agnostic
def test_login_auth_answers_username_and_password_prompts() -> None:
    """Each prompt gets its matching credential."""
    auth = LoginAuth("user", "secret")

    assert auth(b"Username:") == "user"
    assert auth(b"Password:") == "secret"


@pytest.mark.os_agnostic
def test_login_auth_rejects_unknown_prompt() -> None:
    """An unexpected challenge aborts the exchange."""
    with pytest.raises(AuthenticationError, match="unknown challenge"):
        LoginAuth("user", "secret")(b"Token:")


@pytest.mark.os_agnostic
def test_login_auth_start_accepts_any_server() -> None:
    """LOGIN performs no up-front checks."""
    LoginAuth("user", "secret").start(ServerInfo(name="smtp.office365.com", tls=False))


@pytest.mark.os_agnostic
def test_login_auth_repr_hides_password() -> None:
    """repr never shows the password."""
    assert "hunter2" not in repr(LoginAuth("user", "hunter2"))


# ======================== smtplib exchange ========================


class _ScriptedSMTP:
    """Stands in for the AUTH conversation of an ``smtplib.SMTP`` connection."""

    def __init__(self, replies: list[tuple[int, bytes]]) -> None:
        self.replies = replies
        self.commands: list[str] = []

    def docmd(self, cmd: str, args: str = "") -> tuple[int, bytes]:
        self.commands.append(f"{cmd} {args}".strip())
        return self.replies.pop(0)


def _b64(text: str) -> bytes:
    return base64.b64encode(text.encode("ascii"))


@pytest.mark.os_agnostic
def test_smtplib_drives_login_auth_through_both_prompts() -> None:
    """smtplib's AUTH loop receives the username and password from LoginAuth."""
    import smtplib

    script = _ScriptedSMTP([(334, _b64("Username:")), (334, _b64("Password:")), (235, b"2.7.0 Accepted")])

    code, _ = smtplib.SMTP.auth(script, "LOGIN", LoginAuth("user", "secret"))  # type: ignore[arg-type]

    assert code == 235
    assert script.commands == ["AUTH LOGIN", _b64("user").decode(), _b64("secret").decode()]


@pytest.mark.os_agnostic
def test_smtplib_sends_plain_auth_as_initial_response() -> None:
    """smtplib sends the PLAIN response together with the AUTH command."""
    import smtplib

    script = _ScriptedSMTP([(235, b"2.7.0 Accepted")])

    smtplib.SMTP.auth(script, "PLAIN", PlainAuth("", "user", "secret", "smtp.example.com"))  # type: ignore[arg-type]

    assert script.commands == [f"AUTH PLAIN {_b64(chr(0) + 'user' + chr(0) + 'secret').decode()}"]
