"""
Shared module for common utilities used by the REST API and the CLI.

STRUCTURE:
- shared.security: Authentication and authorization
  - auth.py: Principal, current_principal, require_roles guards
  - sessions.py: Session stores (memory, redis) and signed session cookies
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting (slowapi)

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID propagation into logs

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, ReservationStatus, SportType, limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Date-time coercion, tag splitting, upload checks
  - schemas.py: Pydantic request/response schemas

IMPORT EXAMPLES:
    from shared.security.auth import current_principal, require_admin
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, ReservationStatus
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
