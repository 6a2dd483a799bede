# core/exceptions.py
# This file is part of Causeway - Vector-Clock Log Causality Analysis
#
# Exceptions raised while building and mutating causal graphs

"""Graph construction and graph mutation failures.

Data errors (CausalSourceMissingError, CausalCycleError) mean the vector
clocks in the log are inconsistent; the graph is not built. Structural
errors (NodeStructureError) mean a caller broke the contract of the node
primitive and are not meant to be recovered from.
"""


class GraphError(RuntimeError):
    """Base class for causal graph failures."""

    pass


class CausalSourceMissingError(GraphError):
    """No event on `host` carries the clock value another event refers to.

    Attributes:
        host: Host that was searched
        clock_value: Own-clock value that was looked up
        line_number: Source line of the event whose clock refers to it
    """

    def __init__(self, message: str, host: str, clock_value: int, line_number: int):
        super().__init__(message)
        self.host = host
        self.clock_value = clock_value
        self.line_number = line_number


class CausalCycleError(GraphError):
    """Happened-before edges between hosts form a cycle.

    Attributes:
        hosts: Hosts on the dependency cycle, in traversal order
    """

    def __init__(self, message: str, hosts: list):
        super().__init__(message)
        self.hosts = list(hosts)


class NodeStructureError(GraphError):
    """A node operation would violate the linkage invariants."""

    pass
