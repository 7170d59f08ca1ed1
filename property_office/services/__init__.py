"""Service layer modules."""

from property_office.services.auth_service import (
    UsernameTakenError,
    authenticate,
    create_user_account,
    end_session,
    establish_session,
    register_user,
    restore_session,
    set_password,
)
from property_office.services.dashboard_service import get_stats
from property_office.services.seed_service import seed_demo_data

# Import service modules (not individual functions) for cleaner access
from property_office.services import fee_payment_service

__all__ = [
    # Auth service
    "UsernameTakenError",
    "authenticate",
    "register_user",
    "create_user_account",
    "set_password",
    "establish_session",
    "restore_session",
    "end_session",
    # Dashboard
    "get_stats",
    # Seed
    "seed_demo_data",
    # Service modules
    "fee_payment_service",
]
