"""Exception hierarchy for mobingi.

All exceptions inherit from :class:`MobingiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`mobingi.exit_codes`.
The CLI entry point in :func:`mobingi.app.main` catches ``MobingiError``
and exits with the matching code.

Subclass hierarchy::

    MobingiError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- AuthError           (exit 3)
    +-- ConnectionError_    (exit 6)
    +-- ConfigError         (exit 1)

Errors are wrapped rather than replaced: :meth:`MobingiError.wrap` prefixes
a short context label (``"do failed"``, ``"get access token failed"``) to
the message of the underlying error and keeps its type, so the final
message reads like a chain of causes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from mobingi.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)

if TYPE_CHECKING:
    from mobingi.session import Session


class MobingiError(Exception):
    """Base exception for all mobingi errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
        session: The partially-constructed session, when the error was
            raised by :func:`mobingi.session.new`.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        session: Optional[Session] = None,
    ):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code
        self.session = session

    @property
    def message(self) -> str:
        return str(self)

    def wrap(self, label: str, **attrs: Any) -> MobingiError:
        """Return a copy of this error whose message is prefixed with *label*.

        The copy has the same class and exit code. Subclass-specific
        attributes (such as :attr:`AuthError.status_code`) are carried over,
        and any keyword in *attrs* is set on the copy.
        """
        wrapped = self.__class__.__new__(self.__class__)
        wrapped.__dict__.update(self.__dict__)
        Exception.__init__(wrapped, f"{label}: {self}")
        for key, value in attrs.items():
            setattr(wrapped, key, value)
        return wrapped


class InvalidUsageError(MobingiError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(MobingiError):
    """Raised when the credential exchange fails.

    Covers non-2xx token responses, undecodable bodies, a missing
    ``access_token`` field, and an incomplete password grant.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the token response, when one was
            received.
    """

    exit_code = EXIT_AUTH_FAILURE

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        exit_code: int | None = None,
        session: Optional[Session] = None,
    ):
        super().__init__(message, exit_code=exit_code, session=session)
        self.status_code = status_code


class ConnectionError_(MobingiError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(MobingiError):
    """Raised for configuration problems (unbuildable requests, invalid values)."""

    exit_code = EXIT_GENERIC_FAILURE
