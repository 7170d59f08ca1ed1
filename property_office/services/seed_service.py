"""
Demo data for local development.

Creates an admin account, two buildings with one occupied flat each,
an open maintenance request and two published blog posts.
"""

import logging

from property_office.core.security import hash_password
from property_office.db.enums import MaintenancePriority, MaintenanceStatus, Role
from property_office.schemas import (
    BlogPostCreate,
    BuildingCreate,
    FlatCreate,
    MaintenanceRequestCreate,
    ResidentCreate,
    UserCreate,
)
from property_office.storage import Storage

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


def seed_demo_data(storage: Storage, admin_password: str) -> bool:
    """
    Populate an empty store.

    Returns False without touching anything if an admin account already
    exists, so it is safe to call on every startup.
    """
    if storage.get_user_by_username(ADMIN_USERNAME) is not None:
        logger.info("Demo data already present, skipping seed")
        return False

    admin = storage.create_user(
        UserCreate(
            username=ADMIN_USERNAME,
            password=hash_password(admin_password),
            role=Role.ADMIN,
            email="admin@alqyonetim.com.tr",
            first_name="Admin",
            last_name="User",
        )
    )

    gunes = storage.create_building(
        BuildingCreate(
            name="Güneş Residans",
            address="Melikgazi, Kayseri",
            total_flats=24,
            monthly_fee="850.00",
            manager_id=admin.id,
        )
    )
    plaza = storage.create_building(
        BuildingCreate(
            name="Kayseri Plaza",
            address="Kocasinan, Kayseri",
            total_flats=48,
            monthly_fee="1200.00",
            manager_id=admin.id,
        )
    )

    ahmet = storage.create_resident(
        ResidentCreate(name="Ahmet Yılmaz", email="ahmet@email.com", phone="+90 532 123 45 67")
    )
    fatma = storage.create_resident(
        ResidentCreate(name="Fatma Demir", email="fatma@email.com", phone="+90 543 987 65 43")
    )

    flat = storage.create_flat(
        FlatCreate(building_id=gunes.id, flat_number="12", block="A", size=120, resident_id=ahmet.id)
    )
    storage.create_flat(
        FlatCreate(building_id=plaza.id, flat_number="8", block="B", size=95, resident_id=fatma.id)
    )

    storage.create_maintenance_request(
        MaintenanceRequestCreate(
            flat_id=flat.id,
            description="Banyo muslugu arızalı",
            status=MaintenanceStatus.PENDING,
            priority=MaintenancePriority.HIGH,
        )
    )

    storage.create_blog_post(
        BlogPostCreate(
            title="Kayseri'de Bina Yönetimi: Güvenilir ve Profesyonel Hizmetler",
            content="Bina yönetimi konusunda uzman ekibimizle...",
            excerpt="Kayseri'de profesyonel bina yönetimi hizmetleri hakkında bilgiler",
            category="Yönetim",
            published=True,
        )
    )
    storage.create_blog_post(
        BlogPostCreate(
            title="Aidat Toplama ve Finansal Yönetim",
            content="Bina yönetiminde finansal süreçler...",
            excerpt="Aidat toplama ve finansal raporlama hakkında detaylar",
            category="Muhasebe",
            published=True,
        )
    )

    logger.info("Seeded demo data (admin user %s)", admin.id)
    return True
