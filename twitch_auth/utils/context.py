from contextvars import ContextVar

from twitch_auth.models.auth import Auth, Failure

# Outcome of the callback phase for the current request. Set by the host
# connection so code deeper in the request can read it without the Request.
auth_result_var: ContextVar[Auth | Failure | None] = ContextVar("auth_result", default=None)
