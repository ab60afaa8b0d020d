"""Exceptions raised out of core actions."""


class ActionFailedError(Exception):
    """
    A mutation failed in a way that has no form-level report.

    Not converted to an ActionState. Propagates to the HTTP error handlers,
    which answer with a generic internal error.
    """
