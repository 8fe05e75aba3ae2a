"""Numeric process exit codes used by the ``mobingi`` command line.

Each constant maps to an error category and is referenced by the
corresponding :class:`~mobingi.exceptions.MobingiError` subclass, so shell
scripts can tell failure classes apart without parsing stderr.

Example::

    $ mobingi token
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the token endpoint rejected the credentials
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""The credential exchange failed or returned no usable token."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
