"""SMTP authentication schemes.

Both schemes are ``smtplib`` authobjects: the transport calls them once
without a challenge for the optional initial response and once per
``334`` challenge afterwards. :meth:`start` runs before the ``AUTH``
command so a scheme can refuse to expose credentials to the wrong server.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import AuthenticationError

_LOCALHOST_NAMES = frozenset({"localhost", "127.0.0.1", "::1"})


@dataclass(frozen=True, slots=True)
class ServerInfo:
    """What the transport knows about the server at ``AUTH`` time.

    Attributes:
        name: Host name the client connected to.
        tls: Whether the connection is encrypted.
        mechanisms: AUTH mechanisms the server advertised.
    """

    name: str
    tls: bool
    mechanisms: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PlainAuth:
    """AUTH PLAIN (RFC 4616) credentials.

    Credentials are only released over TLS or to localhost, and only to the
    server named by ``host``.

    Example:
        >>> auth = PlainAuth("", "user", "secret", "smtp.example.com")
        >>> auth.start(ServerInfo(name="smtp.example.com", tls=True))
        >>> auth()
        '\\x00user\\x00secret'
        >>> "secret" in repr(auth)
        False
    """

    identity: str
    username: str
    password: str = field(repr=False)
    host: str

    @property
    def mechanism(self) -> str:
        return "PLAIN"

    def start(self, server: ServerInfo) -> None:
        """Refuse unencrypted non-local connections and mismatched hosts.

        Raises:
            AuthenticationError: When sending credentials would leak them.
        """
        if not server.tls and server.name not in _LOCALHOST_NAMES:
            raise AuthenticationError("unencrypted connection")
        if server.name != self.host:
            raise AuthenticationError("wrong host name")

    def __call__(self, challenge: bytes | None = None) -> str:
        return f"{self.identity}\0{self.username}\0{self.password}"


@dataclass(frozen=True, slots=True)
class LoginAuth:
    """AUTH LOGIN credentials for servers that reject AUTH PLAIN.

    Example:
        >>> auth = LoginAuth("user", "secret")
        >>> auth() is None
        True
        >>> auth(b"Username:")
        'user'
        >>> auth(b"Password:")
        'secret'
    """

    username: str
    password: str = field(repr=False)

    @property
    def mechanism(self) -> str:
        return "LOGIN"

    def start(self, server: ServerInfo) -> None:
        """LOGIN sends no initial response; nothing to check up front."""

    def __call__(self, challenge: bytes | None = None) -> str | None:
        """Answer the server's ``Username:`` and ``Password:`` prompts.

        Raises:
            AuthenticationError: For any other prompt.
        """
        if challenge is None:
            return None
        prompt = challenge.decode("utf-8", errors="replace").strip()
        if prompt == "Username:":
            return self.username
        if prompt == "Password:":
            return self.password
        raise AuthenticationError(f"unknown challenge from server: {prompt!r}")


__all__ = ["LoginAuth", "PlainAuth", "ServerInfo"]
