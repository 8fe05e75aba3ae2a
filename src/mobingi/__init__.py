"""mobingi -- client-side sessions for the Mobingi API.

A session is a resolved configuration plus an access token obtained with an
OAuth-style credential exchange (``client_credentials`` or ``password``
grant). Sessions expose the API, registry and sesha3 endpoints and build
requests that carry the bearer token.

Typical usage::

    import mobingi

    sess = mobingi.new()                 # credentials from MOBINGI_* env vars
    req = sess.simple_auth_request("GET", sess.api_endpoint() + "/alm/stack")

Modules:
    session: :class:`Session` and the :func:`new` entry point.
    config: Production URLs, environment variables, override resolution.
    models: Pydantic models (:class:`Config`, :class:`HttpClientConfig`).
    auth: The credential exchange.
    client: HTTP client used by the JSON exchange.
    exceptions: Exception hierarchy with exit-code mapping.
    app: ``mobingi`` command line.
"""

__version__ = "0.1.0"

from mobingi.models import Config, HttpClientConfig  # noqa: E402
from mobingi.session import Session, new  # noqa: E402

__all__ = ["Config", "HttpClientConfig", "Session", "new", "__version__"]
