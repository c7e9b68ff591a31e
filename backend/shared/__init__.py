"""
Shared module for configuration and infrastructure used by content_admin.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Tables, filter types, flag columns

- shared.infrastructure: Backend access
  - backend.py: Async httpx client for the hosted REST and storage APIs

- shared.utils: Utilities
  - exceptions.py: Exceptions with auto-logging
  - validators.py: Multi-shape value normalization, payload cleaning

IMPORT EXAMPLES:
    from shared.config.settings import settings
    from shared.config.constants import Tables, FilterType
    from shared.infrastructure.backend import BackendClient
    from shared.utils.exceptions import BackendAPIError, ValidationError
    from shared.utils.validators import to_string_list
"""
