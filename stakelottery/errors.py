class InvariantViolation(Exception):
    """Raised when a collaborator breaks its contract.

    The lottery result is consensus critical, so these are never caught
    inside the package: the block connection has to fail instead of
    producing a silently different winner list.
    """
