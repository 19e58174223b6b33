"""
Plain-text rendering of observer state for the command line.
"""

from .state import ViewPhase


def _yes_no(value):
    return "yes" if value else "no"


def format_snapshot(snapshot):
    """Render a PathSnapshot as a list of lines."""
    active = snapshot.active_interface
    available = ", ".join(str(i) for i in snapshot.interfaces) or "none"
    return [
        f"Path status: {snapshot.status.value}",
        f"Is expensive: {_yes_no(snapshot.is_expensive)}",
        f"Is constrained: {_yes_no(snapshot.is_constrained)}",
        f"Supports DNS: {_yes_no(snapshot.supports_dns)}",
        f"Supports IPv4: {_yes_no(snapshot.supports_ipv4)}",
        f"Supports IPv6: {_yes_no(snapshot.supports_ipv6)}",
        f"Active interface: {active.name if active else 'none'}",
        f"Active interface type: {active.type.value if active else 'none'}",
        f"Available interfaces: {available}",
    ]


def format_state(state):
    """Render an ObserverState as a list of lines."""
    if state.phase is ViewPhase.SUPPORT_UNKNOWN:
        return ["Querying network path support..."]
    if state.phase is ViewPhase.UNSUPPORTED:
        return ["Network path monitoring unsupported"]
    if state.phase is ViewPhase.SUPPORTED:
        return ["Querying network state..."]

    return ["Network Path State", f"Update count: {state.update_count}"] + format_snapshot(
        state.snapshot
    )


def format_interface(entry):
    """Render one describe_interfaces() entry, ifconfig style."""
    index = entry["index"] if entry["index"] is not None else "?"
    lines = [
        f"{entry['name']} (index {index}, {entry['type'].value}, {'up' if entry['isup'] else 'down'})",
        f"    flags: {','.join(entry['flags']) or '-'}  mtu: {entry['mtu'] if entry['mtu'] else '-'}",
    ]
    for family, address in entry["addresses"]:
        lines.append(f"    {family} {address}")
    return lines
