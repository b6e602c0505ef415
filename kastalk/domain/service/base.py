"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that span several entities (thread
    depth, vote toggling, cascading deletes) and talk to repositories.
    """

    pass
