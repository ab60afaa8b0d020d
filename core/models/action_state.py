"""Outcomes of a mutation action.

An action either reports back to the form (``ActionState``) or hands control
to another view (``Redirect``). Nothing else is ever returned.
"""

from dataclasses import dataclass

from pydantic import BaseModel


class ActionState(BaseModel):
    """
    Caller-facing result of a failed mutation.

    - validation failure: ``errors`` maps field name to messages, plus ``message``
    - persistence failure: ``message`` only, ``errors`` is None
    - empty state (both None): nothing to report
    """

    errors: dict[str, list[str]] | None = None
    message: str | None = None


@dataclass(frozen=True)
class Redirect:
    """Transfer control to ``target``. Terminal for the action that returns it."""

    target: str
