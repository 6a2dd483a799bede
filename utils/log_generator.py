# utils/log_generator.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Synthetic message-passing logs with vector clocks

import json
import random
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

# Pattern matching the two-line format written by generate_log
DEFAULT_PATTERN = r"^(?<host>\S+) (?<clock>\{.*\})\n(?<event>.*)$"


def generate_log(
    num_events_total: int,
    hosts: List[str],
    send_probability: float = 0.3,
    seed: Optional[int] = None,
) -> str:
    """
    Generates a log of hosts exchanging messages, one event per two lines:

        <host> <json vector clock>
        <event text>

    Args:
        num_events_total: Total number of events to generate.
        hosts: Host names (e.g., ["alice", "bob", "carol"]).
        send_probability: Chance that an event also sends a message to a
                          random other host. Pending messages are received
                          as the next event of their destination.
        seed: Seed for reproducible logs.
    """
    if not hosts:
        raise ValueError("hosts list cannot be empty.")

    rng = random.Random(seed)

    # clocks[h] is the vector clock of host h after its latest event
    clocks: Dict[str, Dict[str, int]] = {h: {h: 0} for h in hosts}
    inbox: Dict[str, List[Tuple[str, Dict[str, int]]]] = {h: [] for h in hosts}
    lines: List[str] = []

    for i in range(1, num_events_total + 1):
        host = rng.choice(hosts)
        clock = clocks[host]

        if inbox[host]:
            # Receive: merge the sender's snapshot before ticking
            sender, snapshot = inbox[host].pop(0)
            for other, value in snapshot.items():
                clock[other] = max(clock.get(other, 0), value)
            text = f"event {i}: {host} received message from {sender}"
        else:
            text = f"event {i}: {host} local step"

        clock[host] += 1

        if len(hosts) > 1 and rng.random() < send_probability:
            destination = rng.choice([h for h in hosts if h != host])
            inbox[destination].append((host, dict(clock)))
            text += f" and sent message to {destination}"

        lines.append(f"{host} {json.dumps(clock)}")
        lines.append(text)

    return "\n".join(lines) + "\n"


def generate_log_file(filename: Union[str, Path], num_events_total: int, hosts: List[str],
                      send_probability: float = 0.3, seed: Optional[int] = None) -> None:
    """Writes generate_log output to `filename`."""
    text = generate_log(num_events_total, hosts, send_probability, seed)
    Path(filename).write_text(text, encoding="utf-8")
