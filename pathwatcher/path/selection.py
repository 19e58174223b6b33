"""
Active interface selection.

An interface is a candidate when the path uses its type and the flags query
reports it up and not loopback. Which candidate wins is a policy: the
historical behaviour is the last one in OS order, kept as the default.
"""

from typing import Callable, Optional, Sequence

from ..logging_config import get_logger
from ..models import InterfaceDescriptor, NetworkPath
from ..network import interface_is_active_and_not_loopback

logger = get_logger(__name__)

SelectionPolicy = Callable[[Sequence[InterfaceDescriptor]], Optional[InterfaceDescriptor]]
InterfaceChecker = Callable[[str], bool]


def last_match(candidates):
    """Pick the last candidate in iteration order."""
    return candidates[-1] if candidates else None


def first_match(candidates):
    """Pick the first candidate in iteration order."""
    return candidates[0] if candidates else None


POLICIES = {
    "last": last_match,
    "first": first_match,
}


def get_selection_policy(name):
    """Look up a policy by its config name, falling back to ``last``."""
    policy = POLICIES.get(name)
    if policy is None:
        logger.warning(f"Unknown selection policy '{name}', using 'last'")
        return last_match
    return policy


def find_candidates(path: NetworkPath, is_active_and_not_loopback: InterfaceChecker = None):
    """Return the candidate interfaces of a path in OS order."""
    if is_active_and_not_loopback is None:
        is_active_and_not_loopback = interface_is_active_and_not_loopback

    candidates = []
    for interface in path.available_interfaces:
        if not path.uses_interface_type(interface.type):
            logger.debug(f"Skipping {interface}: path does not use {interface.type.value}")
            continue
        if is_active_and_not_loopback(interface.name):
            candidates.append(interface)
        else:
            logger.debug(f"Skipping {interface}: down or loopback")
    return candidates


def select_active_interface(
    path: NetworkPath,
    is_active_and_not_loopback: InterfaceChecker = None,
    policy: SelectionPolicy = last_match,
) -> Optional[InterfaceDescriptor]:
    """
    Select the active interface of a path.

    Args:
        path: The path reading
        is_active_and_not_loopback: Flags query, defaults to the psutil one
        policy: Chooses among the candidates

    Returns:
        The selected interface, or None if there is no candidate
    """
    return policy(find_candidates(path, is_active_and_not_loopback))
