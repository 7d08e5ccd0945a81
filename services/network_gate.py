# services/network_gate.py

import json
from typing import Any, Dict, Iterable, Optional

from core.outcome import FailureKind, StageFailure


def check_network(
    network: str,
    allowed: Iterable[str],
    intent: Optional[Dict[str, Any]] = None,
) -> Optional[StageFailure]:
    """
    Business-policy gate: the action only runs on allow-listed networks.
    Returns None when the network is allowed.
    """
    allowed_networks = tuple(n.lower() for n in allowed)
    if network.lower() in allowed_networks:
        return None

    message = (
        f"Sorry, I can only swap on {' or '.join(allowed_networks) or 'no network'} "
        f"(current network: {network})"
    )
    if intent is not None:
        message += ", parsed params : " + json.dumps(intent, indent=2)

    return StageFailure(
        kind=FailureKind.UNSUPPORTED_NETWORK,
        message=message,
        intent=intent,
        details={"network": network, "allowed_networks": list(allowed_networks)},
    )
