"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(debug=True, describe_routes=True)
    """

    # Include exception details in error responses
    debug: bool = False

    # Install a default DescribeMiddleware when the app freezes
    describe_routes: bool = False
