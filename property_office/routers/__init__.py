"""API routers."""

from property_office.routers.admin_users import router as admin_users_router
from property_office.routers.auth import router as auth_router
from property_office.routers.blog_posts import router as blog_posts_router
from property_office.routers.buildings import router as buildings_router
from property_office.routers.contact import router as contact_router
from property_office.routers.dashboard import router as dashboard_router
from property_office.routers.fee_payments import router as fee_payments_router
from property_office.routers.flats import router as flats_router
from property_office.routers.maintenance_requests import router as maintenance_requests_router
from property_office.routers.residents import router as residents_router

__all__ = [
    "admin_users_router",
    "auth_router",
    "blog_posts_router",
    "buildings_router",
    "contact_router",
    "dashboard_router",
    "fee_payments_router",
    "flats_router",
    "maintenance_requests_router",
    "residents_router",
]
