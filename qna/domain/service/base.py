"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business rules that span an entity and its
    repository, or several entities at once.
    """

    pass
