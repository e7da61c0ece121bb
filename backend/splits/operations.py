"""
Operation reducer: ``(session, operation) -> session``.

This is the seam a client binds to. An operation is a mapping with an ``op``
name plus that operation's arguments; replaying a list of them over a fresh
session reproduces the client's state without the server keeping any.
"""

from typing import Any, Callable, Dict, Iterable, Mapping
import logging

from .exceptions import UnknownOperationError
from .session import SplitSession

logger = logging.getLogger(__name__)


Reducer = Callable[[SplitSession, Mapping[str, Any]], SplitSession]

OPERATIONS: Dict[str, Reducer] = {
    "select_share": lambda session, args: session.select_share(args.get("share_id")),
    "move_selected_to": lambda session, args: session.move_selected_to(args["ticket_id"]),
    "move_selected_to_new_ticket": lambda session, args: session.move_selected_to_new_ticket(),
    "split_share": lambda session, args: session.split_share(args["share_id"], args["ways"]),
    "apply_mode": lambda session, args: session.apply_mode(args["mode"]),
    "reset": lambda session, args: session.reset(),
    "set_even_ways": lambda session, args: session.set_even_ways(args["ways"]),
}


def apply_operation(session: SplitSession, operation: Mapping[str, Any]) -> SplitSession:
    name = operation.get("op")
    reducer = OPERATIONS.get(name)
    if reducer is None:
        raise UnknownOperationError(name)
    return reducer(session, operation)


def replay(session: SplitSession, operations: Iterable[Mapping[str, Any]]) -> SplitSession:
    count = 0
    for operation in operations:
        session = apply_operation(session, operation)
        count += 1
    logger.debug("Replayed %d split operations", count)
    return session
